# core/navigation.py

"""
Role-scoped navigation catalog.

Every role in ``Role`` maps to an ordered tuple of sidebar entries. The
catalog is plain static data, built and validated once at import, so
"what can role X see" is a single pure call.
"""

from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

from core import features
from core.roles import parse_role
from models.enums import Role


class NavigationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    icon: str
    href: str
    description: Optional[str] = None
    badge: Optional[str] = None   # informational only
    group: str = "main"
    is_coming_soon: bool = False


def _entry(
    id: str,
    label: str,
    icon: str,
    href: str,
    description: str,
    group: str = "main",
    badge: Optional[str] = None,
) -> NavigationEntry:
    return NavigationEntry(
        id=id,
        label=label,
        icon=icon,
        href=href,
        description=description,
        badge=badge,
        group=group,
        is_coming_soon=features.is_coming_soon(id),
    )


# ============================================================
# Sidebar sections, in display order
# ============================================================
NAVIGATION_GROUPS: Dict[str, str] = {
    "main": "Main",
    "management": "Management",
    "personal": "My Household",
    "security": "Security",
    "system": "System",
}


# ============================================================
# All navigation entries, keyed by view id
# ============================================================
ALL_NAVIGATION_ENTRIES: Dict[str, NavigationEntry] = {
    entry.id: entry
    for entry in (
        # Common
        _entry("dashboard", "Dashboard", "dashboard", "/dashboard", "Overview and quick actions"),

        # Superadmin
        _entry("villages", "Village List", "holiday_village", "/villages", "Manage villages and tenants", "management"),
        _entry("users", "Users", "group", "/users", "Manage system users", "management"),
        _entry("superadmin-payments", "Payments", "payment", "/payments", "Payment processing and billing", "system", badge="3"),
        _entry("reports", "Reports", "assessment", "/reports", "Analytics and reports", "system"),

        # Admin Head
        _entry("household-approvals", "Household Approvals", "approval", "/household-approvals", "Review and approve household applications", "management"),
        _entry("active-households", "Active Households", "home", "/active-households", "Manage active household records", "management"),
        _entry("fees-management", "Fees Management", "request_quote", "/fees-management", "Configure and manage fees", "management"),
        _entry("payment-status", "Payment Status", "payment", "/payment-status", "Monitor payment statuses", "system"),
        _entry("rules", "Rules", "rule", "/rules", "Community rules and regulations", "management"),
        _entry("announcements", "Announcements", "campaign", "/announcements", "Community announcements", "management"),
        _entry("construction-permits", "Construction Permits", "engineering", "/construction-permits", "Construction permit management", "management"),

        # Admin Officer
        _entry("household-records", "Household Records", "folder", "/household-records", "Household record management", "management"),
        _entry("sticker-requests", "Sticker Requests", "local_offer", "/sticker-requests", "Process sticker requests", "management"),
        _entry("active-stickers", "Active Stickers", "verified", "/active-stickers", "Manage active stickers", "management"),
        _entry("officer-construction-permits", "Construction Permits", "engineering", "/construction-permits", "Construction permit processing", "management"),
        _entry("manual-payments", "Manual Payments", "payments", "/manual-payments", "Process manual payments", "system"),
        _entry("resident-inquiries", "Resident Inquiries", "help", "/resident-inquiries", "Handle resident inquiries", "management"),

        # Household Head
        _entry("members", "Members", "people", "/members", "Manage household members", "personal"),
        _entry("visitor-management", "Visitor Management", "person_add", "/visitor-management", "Manage visitor access", "personal"),
        _entry("active-guest-passes", "Active Guest Passes", "badge", "/active-guest-passes", "View active guest passes", "personal"),
        _entry("household-sticker-requests", "Sticker Requests", "local_offer", "/sticker-requests", "Submit sticker requests", "personal"),
        _entry("service-requests", "Service Requests", "build", "/service-requests", "Submit and track service requests", "personal"),
        _entry("announcements-rules", "Announcements & Rules", "info", "/announcements-rules", "View announcements and rules", "personal"),
        _entry("fee-status", "Fee Status", "receipt", "/fee-status", "View fee status and payments", "personal"),

        # Security Officer
        _entry("sticker-validation", "Sticker Validation", "verified_user", "/sticker-validation", "Validate vehicle stickers", "security"),
        _entry("guest-registration", "Guest Registration", "how_to_reg", "/guest-registration", "Register guests", "security"),
        _entry("guest-approval-status", "Guest Approval Status", "pending_actions", "/guest-approval-status", "Check guest approval status", "security"),
        _entry("guest-pass-scan", "Guest Pass Scan / Entry Log", "qr_code_scanner", "/guest-pass-scan", "Scan guest passes and log entries", "security"),
        _entry("delivery-logging", "Delivery Logging", "local_shipping", "/delivery-logging", "Log deliveries and packages", "security"),
        _entry("construction-worker-entry", "Construction Worker Entry", "construction", "/construction-worker-entry", "Log construction worker entries", "security"),
        _entry("incident-report", "Incident Report", "report", "/incident-report", "Report incidents", "security"),
        _entry("shift-history", "Shift History / Logs", "history", "/shift-history", "View shift history and logs", "security"),
    )
}


# ============================================================
# ROLE → ORDERED SIDEBAR
# ============================================================
ROLE_NAVIGATION: Dict[Role, Tuple[str, ...]] = {
    Role.superadmin: (
        "dashboard",
        "villages",
        "users",
        "superadmin-payments",
        "reports",
    ),
    Role.admin_head: (
        "dashboard",
        "household-approvals",
        "active-households",
        "fees-management",
        "payment-status",
        "rules",
        "announcements",
        "construction-permits",
    ),
    Role.admin_officer: (
        "dashboard",
        "household-records",
        "sticker-requests",
        "active-stickers",
        "officer-construction-permits",
        "manual-payments",
        "resident-inquiries",
    ),
    Role.household_head: (
        "dashboard",
        "members",
        "visitor-management",
        "active-guest-passes",
        "household-sticker-requests",
        "service-requests",
        "announcements-rules",
        "fee-status",
    ),
    Role.security_officer: (
        "dashboard",
        "sticker-validation",
        "guest-registration",
        "guest-approval-status",
        "guest-pass-scan",
        "delivery-logging",
        "construction-worker-entry",
        "incident-report",
        "shift-history",
    ),
}


def _build_catalog() -> Dict[Role, Tuple[NavigationEntry, ...]]:
    """Resolve every role's id list and check the catalog is complete."""
    ungrouped = [entry.id for entry in ALL_NAVIGATION_ENTRIES.values() if entry.group not in NAVIGATION_GROUPS]
    if ungrouped:
        raise RuntimeError(f"Navigation entries with unknown group: {ungrouped}")

    missing_roles = [role.value for role in Role if role not in ROLE_NAVIGATION]
    if missing_roles:
        raise RuntimeError(f"Navigation catalog has no entries for: {missing_roles}")

    catalog = {}
    for role, view_ids in ROLE_NAVIGATION.items():
        if not view_ids:
            raise RuntimeError(f"Navigation for {role} is empty")
        if len(set(view_ids)) != len(view_ids):
            raise RuntimeError(f"Duplicate navigation ids for {role}")

        unknown = [view_id for view_id in view_ids if view_id not in ALL_NAVIGATION_ENTRIES]
        if unknown:
            raise RuntimeError(f"Navigation for {role} references unknown entries: {unknown}")

        entries = tuple(ALL_NAVIGATION_ENTRIES[view_id] for view_id in view_ids)
        if len({entry.href for entry in entries}) != len(entries):
            raise RuntimeError(f"Duplicate navigation hrefs for {role}")

        catalog[role] = entries
    return catalog


NAVIGATION_CATALOG: Dict[Role, Tuple[NavigationEntry, ...]] = _build_catalog()


def get_navigation_for_role(role: Union[Role, str]) -> Tuple[NavigationEntry, ...]:
    """
    Ordered sidebar entries for ``role``.

    Raises UnknownRoleError for anything outside the Role enum.
    """
    return NAVIGATION_CATALOG[parse_role(role)]


def get_navigation_entry(view_id: str) -> Optional[NavigationEntry]:
    return ALL_NAVIGATION_ENTRIES.get(view_id)


def _normalize_path(href: str) -> str:
    return href.split("?", 1)[0].rstrip("/") or "/"


def find_entry_by_href(role: Union[Role, str], href: str) -> Optional[NavigationEntry]:
    """Map a URL path back to the role's entry, for restoring the view on reload."""
    path = _normalize_path(href)
    for entry in get_navigation_for_role(role):
        if entry.href == path:
            return entry
    return None


# ============================================================
# Grouped sidebar
# ============================================================
class NavigationGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    entries: Tuple[NavigationEntry, ...]


def get_grouped_navigation(role: Union[Role, str]) -> List[NavigationGroup]:
    """
    The role's sidebar split into sections.

    Sections follow NAVIGATION_GROUPS order, entries keep their sidebar
    order, and empty sections are left out.
    """
    entries = get_navigation_for_role(role)
    groups = []
    for group_id, label in NAVIGATION_GROUPS.items():
        members = tuple(entry for entry in entries if entry.group == group_id)
        if members:
            groups.append(NavigationGroup(id=group_id, label=label, entries=members))
    return groups


# ============================================================
# Breadcrumbs
# ============================================================
HOME_HREF = "/dashboard"


class BreadcrumbItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    href: str
    icon: Optional[str] = None
    is_active: bool = False
    is_clickable: bool = True


def find_active_entry(role: Union[Role, str], href: str) -> Optional[NavigationEntry]:
    """Entry owning ``href``: an exact match, else the entry whose path prefixes it."""
    entry = find_entry_by_href(role, href)
    if entry is not None:
        return entry

    path = _normalize_path(href)
    for candidate in get_navigation_for_role(role):
        if path.startswith(candidate.href + "/"):
            return candidate
    return None


def get_breadcrumbs(role: Union[Role, str], href: str) -> List[BreadcrumbItem]:
    """
    Trail from Home to the entry owning ``href``.

    Home is always first. Paths outside the role's sidebar yield Home only.
    The last item is never clickable.
    """
    path = _normalize_path(href)
    at_home = path == HOME_HREF

    trail = [
        BreadcrumbItem(
            id="home",
            label="Home",
            href=HOME_HREF,
            icon="home",
            is_active=at_home,
            is_clickable=not at_home,
        )
    ]

    entry = find_active_entry(role, path)
    if entry is not None and entry.href != HOME_HREF:
        trail.append(
            BreadcrumbItem(
                id=entry.id,
                label=entry.label,
                href=entry.href,
                icon=entry.icon,
                is_active=entry.href == path,
                is_clickable=False,
            )
        )
    return trail


# ============================================================
# Search / stats
# ============================================================
def search_navigation(role: Union[Role, str], query: str) -> Tuple[NavigationEntry, ...]:
    """Case-insensitive match on label or href, in sidebar order."""
    needle = query.strip().lower()
    return tuple(
        entry for entry in get_navigation_for_role(role)
        if needle in entry.label.lower() or needle in entry.href.lower()
    )


class NavigationStats(BaseModel):
    role: str
    total_items: int
    total_groups: int
    coming_soon_items: int
    badged_items: int


def get_navigation_stats(role: Union[Role, str]) -> NavigationStats:
    role = parse_role(role)
    entries = get_navigation_for_role(role)
    return NavigationStats(
        role=role.value,
        total_items=len(entries),
        total_groups=len(get_grouped_navigation(role)),
        coming_soon_items=sum(1 for entry in entries if entry.is_coming_soon),
        badged_items=sum(1 for entry in entries if entry.badge is not None),
    )
