"""
Users module exceptions.

Raised by the user stores and the user service; the API error handlers
turn them into HTTP responses.
"""

from shared.exceptions import ConflictError, ExternalServiceError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when no active user has the given ID."""

    def __init__(self, user_id: str):
        super().__init__(
            "user not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class DuplicateEmailError(ConflictError):
    """Raised when an email is already used by another active user."""

    def __init__(self, message: str = "email already exists"):
        super().__init__(message, code="EMAIL_ALREADY_EXISTS")


class StorageError(ExternalServiceError):
    """Raised when the user store fails for any reason other than "not found"."""

    def __init__(self, message: str = "user store failure"):
        super().__init__(message, service="user-store", code="STORAGE_FAILURE")
