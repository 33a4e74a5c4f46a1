# routers/dashboard.py

from typing import Dict
from fastapi import APIRouter, Depends, HTTPException, Query

from core.sessions import SessionContext
from core.stats import StatAggregator
from core.supabase_client import get_supabase_client
from dependencies.auth import CurrentUser, get_current_user
from dependencies.session import get_session_context
from models.session import StatRead
from services.dashboard_stats import build_dashboard_stats


router = APIRouter(
    prefix="/dashboard/stats",
    tags=["Dashboard"],
)


def _ensure_stats(context: SessionContext, current_user: CurrentUser) -> StatAggregator:
    """Build the session's aggregator on first use and start its fetches."""
    if context.stats is None:
        client = get_supabase_client()
        if client is None:
            raise HTTPException(503, "Supabase client not configured")
        context.stats = build_dashboard_stats(context.role, client, current_user.tenant_id)
        context.stats.refetch_all()
    return context.stats


# -----------------------------------------------------
# GET /dashboard/stats
# Per-widget {data, loading, error}
# -----------------------------------------------------
@router.get("", response_model=Dict[str, StatRead])
async def get_stats(
    context: SessionContext = Depends(get_session_context),
    current_user: CurrentUser = Depends(get_current_user),
):
    return _ensure_stats(context, current_user).to_dict()


# -----------------------------------------------------
# POST /dashboard/stats/refetch
# `wait=true` blocks until this round settles
# -----------------------------------------------------
@router.post("/refetch", response_model=Dict[str, StatRead])
async def refetch_stats(
    wait: bool = Query(False),
    context: SessionContext = Depends(get_session_context),
    current_user: CurrentUser = Depends(get_current_user),
):
    stats = _ensure_stats(context, current_user)
    pending = stats.refetch_all()
    if wait:
        await pending
    return stats.to_dict()


# -----------------------------------------------------
# POST /dashboard/stats/{name}/retry
# Re-issues one widget's fetch; siblings untouched
# -----------------------------------------------------
@router.post("/{name}/retry", response_model=Dict[str, StatRead])
async def retry_stat(
    name: str,
    wait: bool = Query(False),
    context: SessionContext = Depends(get_session_context),
    current_user: CurrentUser = Depends(get_current_user),
):
    stats = _ensure_stats(context, current_user)
    if name not in stats:
        raise HTTPException(404, f"Unknown statistic: {name}")

    pending = stats.retry(name)
    if wait:
        await pending
    return stats.to_dict()
