# routers/session.py

from typing import Optional
from fastapi import APIRouter, Body, Depends, HTTPException

from core.navigation import find_entry_by_href
from core.roles import get_role_display_name, parse_role
from core.sessions import SessionContext, SessionStore
from core.logging_config import logger
from dependencies.auth import CurrentUser, get_current_user
from dependencies.session import get_session_context, get_session_store
from models.session import SessionOpen, SessionRead, ViewChange, ViewRead


router = APIRouter(
    prefix="/session",
    tags=["Content View"],
)


def _view_for_href(role, href: str) -> str:
    entry = find_entry_by_href(role, href)
    if entry is None:
        raise HTTPException(404, f"No navigation entry for path {href!r}")
    return entry.id


def _session_read(context: SessionContext) -> SessionRead:
    return SessionRead(
        session_id=context.session_id,
        role=context.role.value,
        role_display_name=get_role_display_name(context.role),
        view=ViewRead.from_state(context.router.state),
    )


# -----------------------------------------------------
# POST /session
# Start a session (login or page reload)
# -----------------------------------------------------
@router.post("", response_model=SessionRead)
async def open_session(
    payload: Optional[SessionOpen] = Body(None),
    current_user: CurrentUser = Depends(get_current_user),
    store: SessionStore = Depends(get_session_store),
):
    role = parse_role(current_user.role)
    payload = payload or SessionOpen()

    initial_view = payload.initial_view
    if payload.href:
        initial_view = _view_for_href(role, payload.href)

    context = store.open(role, user_id=current_user.id, initial_view=initial_view)
    return _session_read(context)


# -----------------------------------------------------
# GET /session/view
# -----------------------------------------------------
@router.get("/view", response_model=ViewRead)
async def get_active_view(context: SessionContext = Depends(get_session_context)):
    return ViewRead.from_state(context.router.state)


# -----------------------------------------------------
# PUT /session/view
# Swap the content panel; caller mirrors `href` into the URL
# -----------------------------------------------------
@router.put("/view", response_model=ViewRead)
async def set_active_view(
    payload: ViewChange,
    context: SessionContext = Depends(get_session_context),
):
    view_id = payload.view_id or _view_for_href(context.role, payload.href)
    state = context.router.set_active_view(view_id)
    return ViewRead.from_state(state)


# -----------------------------------------------------
# DELETE /session
# Logout: tears down the router and dashboard stats
# -----------------------------------------------------
@router.delete("", status_code=204)
async def close_session(
    context: SessionContext = Depends(get_session_context),
    store: SessionStore = Depends(get_session_store),
):
    store.close(context.session_id)
    logger.info(f"Logout for user {context.user_id}")
