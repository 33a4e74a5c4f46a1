# services/dashboard_stats.py

"""
Supabase-backed count queries for the role dashboards.

The Supabase client is synchronous, so each query runs in a worker
thread; the aggregator can then fan them out on the event loop.
"""

import asyncio
from typing import Dict, Optional

from supabase import Client

from core.logging_config import logger
from core.stats import Fetcher, StatAggregator
from models.enums import Role


# -----------------------------------------------------
# Lookup codes (normalized status tables)
# -----------------------------------------------------
VILLAGE_STATUS_CATEGORY = "village_tenant_statuses"
HOUSEHOLD_STATUS_CATEGORY = "household_statuses"


class LookupNotFoundError(LookupError):
    pass


def lookup_value_id(client: Client, category_code: str, value_code: str) -> str:
    """Resolve a lookup_values id from its category code and value code."""
    category = (
        client.table("lookup_categories")
        .select("id")
        .eq("code", category_code)
        .limit(1)
        .execute()
    )
    if not category.data:
        raise LookupNotFoundError(f"Lookup category '{category_code}' not found")

    value = (
        client.table("lookup_values")
        .select("id")
        .eq("code", value_code)
        .eq("category_id", category.data[0]["id"])
        .limit(1)
        .execute()
    )
    if not value.data:
        raise LookupNotFoundError(f"Lookup value '{value_code}' not found in '{category_code}'")

    return value.data[0]["id"]


def count_rows(client: Client, table: str, filters: Optional[Dict[str, str]] = None) -> int:
    query = client.table(table).select("id", count="exact", head=True)
    for column, value in (filters or {}).items():
        query = query.eq(column, value)
    result = query.execute()
    return result.count or 0


# -----------------------------------------------------
# Fetcher factories
# -----------------------------------------------------
def total_count(client: Client, table: str, tenant_id: Optional[str] = None) -> Fetcher:
    filters = {"tenant_id": tenant_id} if tenant_id else {}

    async def fetch() -> int:
        return await asyncio.to_thread(count_rows, client, table, filters)

    return fetch


def status_count(
    client: Client,
    table: str,
    category_code: str,
    status_code: str,
    tenant_id: Optional[str] = None,
) -> Fetcher:
    def run() -> int:
        status_id = lookup_value_id(client, category_code, status_code)
        filters = {"status_id": status_id}
        if tenant_id:
            filters["tenant_id"] = tenant_id
        return count_rows(client, table, filters)

    async def fetch() -> int:
        return await asyncio.to_thread(run)

    return fetch


# -----------------------------------------------------
# Role → dashboard widgets
# -----------------------------------------------------
def build_dashboard_stats(role: Role, client: Client, tenant_id: Optional[str] = None) -> StatAggregator:
    """Aggregator with one tracked statistic per dashboard stat card."""
    if role == Role.superadmin:
        fetchers = {
            "total_villages": total_count(client, "villages"),
            "active_villages": status_count(client, "villages", VILLAGE_STATUS_CATEGORY, "active"),
            "inactive_villages": status_count(client, "villages", VILLAGE_STATUS_CATEGORY, "inactive"),
        }
    elif role == Role.admin_head:
        fetchers = {
            "total_households": total_count(client, "households", tenant_id),
            "pending_applications": status_count(
                client, "households", HOUSEHOLD_STATUS_CATEGORY, "pending_approval", tenant_id
            ),
            "active_households": status_count(
                client, "households", HOUSEHOLD_STATUS_CATEGORY, "active", tenant_id
            ),
        }
    elif tenant_id:
        fetchers = {"total_households": total_count(client, "households", tenant_id)}
    else:
        fetchers = {}

    logger.debug(f"Dashboard stats for {role}: {list(fetchers)}")
    return StatAggregator(fetchers)
