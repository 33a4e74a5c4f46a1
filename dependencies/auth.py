from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from supabase import Client

from core.supabase_client import get_supabase_client


bearer_scheme = HTTPBearer()


# ============================================================
# Current User Model (identity supplied by Supabase Auth)
# ============================================================
class CurrentUser(BaseModel):
    id: str
    email: str
    role: str                       # validated by the navigation catalog

    full_name: Optional[str] = None
    tenant_id: Optional[str] = None  # village the user belongs to


# ============================================================
# AUTH DECODING (Supabase: validates JWT + reads metadata)
# ============================================================
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> CurrentUser:

    token = credentials.credentials

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    client: Client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    # ---------------------------------------------------------
    # Validate JWT via Supabase GoTrue
    # ---------------------------------------------------------
    try:
        auth_resp = client.auth.get_user(token)
    except Exception:
        raise unauthorized

    if not auth_resp or not auth_resp.user:
        raise unauthorized
    auth_user = auth_resp.user

    if not auth_user.email:
        raise unauthorized

    # ---------------------------------------------------------
    # Role comes from metadata; it is never defaulted
    # ---------------------------------------------------------
    metadata = auth_user.user_metadata or {}
    role = metadata.get("role")
    if not role:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No role assigned to this account",
        )

    return CurrentUser(
        id=auth_user.id,
        email=auth_user.email,
        role=role,
        full_name=metadata.get("full_name"),
        tenant_id=metadata.get("tenant_id"),
    )
