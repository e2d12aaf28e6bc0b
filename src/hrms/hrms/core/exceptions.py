from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced user, organization or shift is missing."""


class ConflictError(DomainError):
    """Raised by storage when a uniqueness constraint is violated."""


class OutOfRangeError(DomainError):
    """Reported position is outside the office geofence."""

    def __init__(self, distance_m: int, radius_m: float):
        self.distance_m = distance_m
        self.radius_m = radius_m
        super().__init__(
            "You are not within the office location radius "
            f"(your distance: {distance_m}m, allowed: {radius_m:g}m)"
        )


class AlreadyCheckedInError(DomainError):
    def __init__(self, message: str = "You have already checked in today"):
        super().__init__(message)


class AlreadyCheckedOutError(DomainError):
    def __init__(self, message: str = "You have already checked out today"):
        super().__init__(message)


class NotCheckedInError(DomainError):
    def __init__(self, message: str = "You must check in before checking out"):
        super().__init__(message)


class WeeklyOffError(DomainError):
    def __init__(self, message: str = "Today is your weekly off day"):
        super().__init__(message)


class UploadError(DomainError):
    """Selfie could not be stored."""
