"""
Error model for the Gatehouse backend.

Every failure a handler can raise is a GatehouseError. The subclass decides
the HTTP status (api/middleware/errors.py); ``code`` becomes the ``error``
field of the response envelope and ``message`` its ``message``.

    ValidationError       400
    AuthenticationError   401, with ``WWW-Authenticate: Bearer``
    AuthorizationError    403
    NotFoundError         404
    ConflictError         409
    anything else         500, generic message only

Modules raise their own subclasses (modules/auth/exceptions.py,
modules/users/exceptions.py) rather than these bases.
"""

from typing import Optional, Any


class GatehouseError(Exception):
    """
    Root of the error hierarchy.

    ``code`` defaults to the class name; ``details`` carries per-field
    information for the response and must never hold secrets.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Error fields of the response envelope."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(GatehouseError):
    """No live user with the requested id. Soft-deleted users count as missing."""

    pass


class ValidationError(GatehouseError):
    """Request data rejected, e.g. a password longer than 72 bytes."""

    pass


class ConflictError(GatehouseError):
    """A unique value is already taken; in practice a registered email."""

    pass


class AuthenticationError(GatehouseError):
    """
    Bad credentials, or a missing, malformed, forged or expired bearer token.

    Login failures share one message so callers cannot tell an unknown email
    from a wrong password.
    """

    pass


class AuthorizationError(GatehouseError):
    """Caller is authenticated but may not perform the operation."""

    pass


class InternalError(GatehouseError):
    """
    Request-level failure inside the service, such as password hashing or
    token signing.

    The request fails with 500, the process keeps running. Only a generic
    message reaches the caller; the original is logged.
    """

    pass


class ExternalServiceError(GatehouseError):
    """
    The user store (or another backing service) failed.

    ``service`` names the backend and is copied into ``details`` for logs.
    Answered with 500 like InternalError.
    """

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
