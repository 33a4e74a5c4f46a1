# models/session.py

from typing import Dict, Optional
from pydantic import BaseModel, model_validator

from core.content_view import ActiveViewState
from core.navigation import get_navigation_entry


# -------------------------------------------------
# Payloads
# -------------------------------------------------
class SessionOpen(BaseModel):
    """
    Opening a session after login or reload.
    ``href`` is the current URL path; it wins over ``initial_view``.
    """
    initial_view: Optional[str] = None
    href: Optional[str] = None


class ViewChange(BaseModel):
    view_id: Optional[str] = None
    href: Optional[str] = None

    @model_validator(mode="after")
    def require_target(self):
        if not self.view_id and not self.href:
            raise ValueError("Either view_id or href is required")
        return self


# -------------------------------------------------
# Read (router snapshot → API response)
# -------------------------------------------------
class ViewRead(BaseModel):
    active_view: str
    page_title: str
    is_coming_soon: bool
    href: Optional[str] = None   # mirrored into the URL by the caller

    @classmethod
    def from_state(cls, state: ActiveViewState) -> "ViewRead":
        entry = get_navigation_entry(state.active_view)
        return cls(
            active_view=state.active_view,
            page_title=state.page_title,
            is_coming_soon=state.is_coming_soon,
            href=entry.href if entry else None,
        )


class SessionRead(BaseModel):
    session_id: str
    role: str
    role_display_name: str
    view: ViewRead


class StatRead(BaseModel):
    data: Optional[int] = None
    loading: bool
    error: Optional[Dict[str, str]] = None
