# core/errors.py

# ============================================================
# Navigation / session errors
# ============================================================
class NavigationError(Exception):
    """Base class for navigation engine errors."""


class UnknownRoleError(NavigationError, ValueError):
    """Raised when a role outside the closed Role enum reaches the catalog."""

    def __init__(self, role):
        self.role = role
        super().__init__(f"Unknown role: {role!r}")


class ContextNotInitializedError(NavigationError, RuntimeError):
    """Raised when a session-scoped object is used outside its session."""

    def __init__(self, message: str = "Content view session is not initialized"):
        super().__init__(message)


# ============================================================
# Dashboard stat errors (contained per statistic)
# ============================================================
class StatFetchError(Exception):
    """
    Wraps any failure from a stat's transport.

    Stored as that statistic's ``error``; never raised to the
    aggregator's caller. The underlying exception is kept as ``__cause__``.
    """

    def __init__(self, stat_name: str, message: str):
        self.stat_name = stat_name
        super().__init__(message)

    def to_dict(self) -> dict:
        cause = self.__cause__
        return {
            "message": str(self),
            "type": type(cause).__name__ if cause is not None else "StatFetchError",
        }


# ============================================================
# Supabase error helpers
# ============================================================
def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1 - Supabase Auth / GoTrue / PostgREST APIError
    message = getattr(error, "message", None)
    if message:
        return str(message)

    # Case 2 - errors with args (common)
    if getattr(error, "args", None):
        return str(error.args[0])

    # Case 3 - plain string fallback
    return str(error) or type(error).__name__

