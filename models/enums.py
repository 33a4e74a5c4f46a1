from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# USER ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Closed set of authenticated identities. Drives sidebar visibility."""

    superadmin = "superadmin"
    admin_head = "admin_head"
    admin_officer = "admin_officer"
    household_head = "household_head"
    security_officer = "security_officer"
