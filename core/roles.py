# core/roles.py

from typing import Dict, List, Union

from core.errors import UnknownRoleError
from models.enums import Role


# ============================================
# ROLE → DISPLAY NAME
# ============================================
ROLE_DISPLAY_NAMES: Dict[Role, str] = {
    Role.superadmin: "Super Administrator",
    Role.admin_head: "Administrative Head",
    Role.admin_officer: "Administrative Officer",
    Role.household_head: "Household Head",
    Role.security_officer: "Security Officer",
}


# ============================================
# ROLE → HIERARCHY LEVEL (higher = more access)
# ============================================
ROLE_LEVELS: Dict[Role, int] = {
    Role.superadmin: 100,
    Role.admin_head: 80,
    Role.admin_officer: 60,
    Role.security_officer: 50,
    Role.household_head: 40,
}


def parse_role(value: Union[Role, str]) -> Role:
    """Coerce a role value into the closed enum. Never defaults."""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        raise UnknownRoleError(value) from None


def is_valid_role(value) -> bool:
    return value in Role.list()


def all_roles() -> List[Role]:
    return list(Role)


def get_role_display_name(role: Union[Role, str]) -> str:
    return ROLE_DISPLAY_NAMES[parse_role(role)]


def get_role_level(role: Union[Role, str]) -> int:
    return ROLE_LEVELS[parse_role(role)]


for _table in (ROLE_DISPLAY_NAMES, ROLE_LEVELS):
    if set(_table) != set(Role):
        raise RuntimeError(f"Role table incomplete: missing {sorted(set(Role) - set(_table))}")
