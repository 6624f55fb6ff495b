"""Domain exceptions for the settlement services."""


class SettlementServiceError(Exception):
    """Base exception for all settlement service errors."""
    pass


class MemberNotFoundError(SettlementServiceError, LookupError):
    """User is not a member of the group."""

    def __init__(self, user_id: str, group_id: str | None = None):
        self.user_id = user_id
        self.group_id = group_id
        super().__init__("User not found in group")


class InvalidDateRangeError(SettlementServiceError, ValueError):
    """Start of the date range is after its end."""
    pass
