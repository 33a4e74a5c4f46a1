# core/features.py

"""
Feature metadata for content views.

Maps a view id to its display name, icon and description, and decides
whether the view renders the "coming soon" placeholder. Independent of
the navigation catalog: deep-linked views resolve here even when no
role's sidebar lists them.
"""

from typing import Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict


DASHBOARD_VIEW = "dashboard"
DASHBOARD_TITLE = "Dashboard"

FALLBACK_TITLE = "Feature"
FALLBACK_ICON = "construction"
FALLBACK_DESCRIPTION = "This feature is currently under development. Check back soon!"


class FeatureConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    icon: str
    description: str


# -------------------------------------------------
# View id → feature metadata
# -------------------------------------------------
FEATURE_CONFIG: Dict[str, FeatureConfig] = {
    # Superadmin
    "villages": FeatureConfig(
        name="Village List",
        icon="holiday_village",
        description="Manage villages and tenants across the platform. Create, edit, and oversee all villages in the system.",
    ),
    "users": FeatureConfig(
        name="Users",
        icon="group",
        description="Create, edit, and manage user accounts, roles, and permissions across all villages in the platform.",
    ),
    "superadmin-payments": FeatureConfig(
        name="Payments",
        icon="payment",
        description="Handle financial transactions, fees, and billing across villages with integrated reporting.",
    ),
    "reports": FeatureConfig(
        name="Reports",
        icon="assessment",
        description="Generate detailed insights, export data, and monitor key performance indicators.",
    ),

    # Admin Head
    "household-approvals": FeatureConfig(
        name="Household Approvals",
        icon="approval",
        description="Review and approve household applications for new residents.",
    ),
    "active-households": FeatureConfig(
        name="Active Households",
        icon="home",
        description="View, edit, and maintain household records and their members.",
    ),
    "fees-management": FeatureConfig(
        name="Fees Management",
        icon="request_quote",
        description="Set fee structures, manage billing cycles, and handle payment collection workflows.",
    ),
    "payment-status": FeatureConfig(
        name="Payment Status",
        icon="payment",
        description="View outstanding payments, generate payment reports, and manage collection activities.",
    ),
    "rules": FeatureConfig(
        name="Rules",
        icon="rule",
        description="Define policies, set guidelines, and keep residents informed of community standards.",
    ),
    "announcements": FeatureConfig(
        name="Announcements",
        icon="campaign",
        description="Keep residents informed with important updates, events, and community news.",
    ),
    "construction-permits": FeatureConfig(
        name="Construction Permits",
        icon="engineering",
        description="Handle permit applications and track construction activities.",
    ),
    "sticker-approvals": FeatureConfig(
        name="Sticker Approvals",
        icon="approval",
        description="Review and approve vehicle and people sticker requests.",
    ),

    # Admin Officer
    "household-records": FeatureConfig(
        name="Household Records",
        icon="folder",
        description="Access, update, and maintain detailed household information and member data.",
    ),
    "sticker-requests": FeatureConfig(
        name="Sticker Requests",
        icon="local_offer",
        description="Process new sticker requests, handle renewals, and track sticker inventory.",
    ),
    "active-stickers": FeatureConfig(
        name="Active Stickers",
        icon="verified",
        description="Monitor sticker status, handle renewals, and maintain sticker records.",
    ),
    "officer-construction-permits": FeatureConfig(
        name="Construction Permits",
        icon="engineering",
        description="Review permit submissions and coordinate with contractors.",
    ),
    "manual-payments": FeatureConfig(
        name="Manual Payments",
        icon="payments",
        description="Handle cash payments, payment corrections, and special payment arrangements.",
    ),
    "resident-inquiries": FeatureConfig(
        name="Resident Inquiries",
        icon="help",
        description="Respond to resident inquiries and track resolution status.",
    ),

    # Household Head
    "members": FeatureConfig(
        name="Members",
        icon="people",
        description="Add, edit, and organize household member details.",
    ),
    "visitor-management": FeatureConfig(
        name="Visitor Management",
        icon="person_add",
        description="Pre-register visitors, generate guest passes, and track visitor activity.",
    ),
    "active-guest-passes": FeatureConfig(
        name="Active Guest Passes",
        icon="badge",
        description="Track pass status, expiration dates, and visitor check-ins.",
    ),
    "household-sticker-requests": FeatureConfig(
        name="Sticker Requests",
        icon="local_offer",
        description="Apply for new vehicle stickers and manage renewals for your household.",
    ),
    "service-requests": FeatureConfig(
        name="Service Requests",
        icon="build",
        description="Report issues, request repairs, and monitor resolution progress.",
    ),
    "announcements-rules": FeatureConfig(
        name="Announcements & Rules",
        icon="info",
        description="Stay informed about community updates, events, and policy changes.",
    ),
    "fee-status": FeatureConfig(
        name="Fee Status",
        icon="receipt",
        description="Check outstanding balances, payment due dates, and transaction records.",
    ),

    # Security Officer
    "sticker-validation": FeatureConfig(
        name="Sticker Validation",
        icon="verified_user",
        description="Scan and verify vehicle stickers at the gate.",
    ),
    "guest-registration": FeatureConfig(
        name="Guest Registration",
        icon="how_to_reg",
        description="Register visitors at the checkpoint and issue temporary access credentials.",
    ),
    "guest-approval-status": FeatureConfig(
        name="Guest Approval Status",
        icon="pending_actions",
        description="Verify pre-registered visitors and their authorization.",
    ),
    "guest-pass-scan": FeatureConfig(
        name="Guest Pass Scan / Entry Log",
        icon="qr_code_scanner",
        description="Scan guest passes and keep the security entry log.",
    ),
    "delivery-logging": FeatureConfig(
        name="Delivery Logging",
        icon="local_shipping",
        description="Track deliveries, recipients, and package collection status.",
    ),
    "construction-worker-entry": FeatureConfig(
        name="Construction Worker Entry",
        icon="construction",
        description="Verify worker credentials and track construction site access.",
    ),
    "incident-report": FeatureConfig(
        name="Incident Report",
        icon="report",
        description="Document incidents, track investigations, and maintain security records.",
    ),
    "shift-history": FeatureConfig(
        name="Shift History / Logs",
        icon="history",
        description="Access previous shift reports, activity logs, and security events.",
    ),
}

# Views with a real content panel; every other configured view is a placeholder.
IMPLEMENTED_VIEWS: FrozenSet[str] = frozenset({
    DASHBOARD_VIEW,
    "villages",
    "household-approvals",
    "active-households",
    "members",
    "sticker-approvals",
})


def get_feature_config(view_id: str) -> Optional[FeatureConfig]:
    return FEATURE_CONFIG.get(view_id)


def resolve_title(view_id: str) -> str:
    """Header title for a view. Unknown ids get the fallback title."""
    if view_id == DASHBOARD_VIEW:
        return DASHBOARD_TITLE
    config = get_feature_config(view_id)
    return config.name if config else FALLBACK_TITLE


def is_coming_soon(view_id: str) -> bool:
    return view_id in FEATURE_CONFIG and view_id not in IMPLEMENTED_VIEWS


def get_feature_icon(view_id: str) -> str:
    config = get_feature_config(view_id)
    return config.icon if config else FALLBACK_ICON


def get_feature_description(view_id: str) -> str:
    config = get_feature_config(view_id)
    return config.description if config else FALLBACK_DESCRIPTION
