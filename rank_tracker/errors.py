"""Domain errors surfaced to API callers.

Each error carries an HTTP status code, a machine-readable category and a
human-readable message. Handlers in ``rank_tracker.main`` render them as
``{"error": category, "detail": message}``.
"""

from fastapi import status


class RankTrackerError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    category: str = "internal_error"
    default_message: str = "Something went wrong"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(RankTrackerError):
    """Client-correctable validation failure."""

    status_code = status.HTTP_400_BAD_REQUEST
    category = "invalid_input"
    default_message = "Invalid input"

    def __init__(self, fields: dict[str, str], message: str | None = None) -> None:
        self.fields = fields
        super().__init__(message or "; ".join(fields.values()) or self.default_message)


class Unauthenticated(RankTrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    category = "unauthenticated"
    default_message = "Not authenticated"


class InvalidCredentials(RankTrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    category = "invalid_credentials"
    default_message = "Incorrect email or password"


class EmailInUse(RankTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    category = "email_in_use"
    default_message = "Email already in use"


class UserNotFound(RankTrackerError):
    """The session refers to an account that no longer exists."""

    status_code = status.HTTP_404_NOT_FOUND
    category = "user_not_found"
    default_message = "User not found"


class NotFoundOrUnauthorized(RankTrackerError):
    """Missing and not-owned resources are reported identically."""

    status_code = status.HTTP_404_NOT_FOUND
    category = "not_found"
    default_message = "URL not found or unauthorized"


class InternalError(RankTrackerError):
    pass
