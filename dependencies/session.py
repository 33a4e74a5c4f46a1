from typing import Optional
from fastapi import Depends, Header, HTTPException, Request, status

from core.errors import ContextNotInitializedError
from core.sessions import SessionContext, SessionStore
from dependencies.auth import CurrentUser, get_current_user


SESSION_HEADER = "X-Session-Id"


async def get_session_store(request: Request) -> SessionStore:
    store = getattr(request.app.state, "sessions", None)
    if store is None:
        raise ContextNotInitializedError("Session store is not initialized")
    return store


# ============================================================
# Session lookup (must belong to the calling user)
# ============================================================
async def get_session_context(
    x_session_id: Optional[str] = Header(None, alias=SESSION_HEADER),
    store: SessionStore = Depends(get_session_store),
    current_user: CurrentUser = Depends(get_current_user),
) -> SessionContext:
    context = store.get(x_session_id)

    if context.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Session belongs to another user",
        )
    return context
