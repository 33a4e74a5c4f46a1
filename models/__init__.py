# -------------------------
# Enums
# -------------------------
from .enums import BaseStrEnum, Role

# Request/response models live in models.feature and models.session;
# they import the core catalog, so they are not re-exported here.

__all__ = [
    "BaseStrEnum",
    "Role",
]
