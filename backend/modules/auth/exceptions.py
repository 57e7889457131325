"""
Authentication module exceptions.

Public messages are deliberately generic. Anything that tells *why* an
authentication failed (unknown email vs wrong password, which token check
failed) stays on attributes that are logged but never serialized.
"""

from shared.exceptions import AuthenticationError, InternalError, ValidationError


class InvalidCredentialsError(AuthenticationError):
    """
    Raised when login fails.

    Unknown email and wrong password produce the same code and message so
    that responses cannot be used to find out which emails are registered.
    ``reason`` is for logs only.
    """

    def __init__(self, reason: str):
        super().__init__("invalid credentials", code="INVALID_CREDENTIALS")
        self.reason = reason


class UnauthenticatedError(AuthenticationError):
    """Raised when a protected route is called without a usable bearer token."""

    def __init__(self, message: str = "authorization required"):
        super().__init__(message, code="UNAUTHENTICATED")


class TokenError(AuthenticationError):
    """Base class for token verification failures."""

    pass


class MalformedTokenError(TokenError):
    """Raised when a token cannot be parsed or lacks required claims."""

    def __init__(self, message: str = "malformed token"):
        super().__init__(message, code="MALFORMED_TOKEN")


class BadSignatureError(TokenError):
    """Raised when a token's signature does not match the secret."""

    def __init__(self, message: str = "token signature mismatch"):
        super().__init__(message, code="BAD_SIGNATURE")


class TokenExpiredError(TokenError):
    """Raised when a correctly signed token is past its expiry."""

    def __init__(self, message: str = "token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class SigningError(InternalError):
    """Raised when a token cannot be signed."""

    def __init__(self, message: str = "token signing failed"):
        super().__init__(message, code="SIGNING_FAILED")


class TokenIssuanceError(InternalError):
    """Raised by the credential service when issuing a session token fails."""

    def __init__(self, message: str = "token issuance failed"):
        super().__init__(message, code="TOKEN_ISSUANCE_FAILED")


class HashingError(InternalError):
    """Raised when computing a password hash fails."""

    def __init__(self, message: str = "password hashing failed"):
        super().__init__(message, code="HASHING_FAILED")


class PasswordTooLongError(ValidationError):
    """Raised when a password is longer than bcrypt can hash without truncation."""

    def __init__(self, message: str = "password must be at most 72 bytes"):
        super().__init__(message, code="PASSWORD_TOO_LONG")


class MalformedDigestError(InternalError):
    """Raised when a stored password digest is not a valid bcrypt string."""

    def __init__(self, message: str = "malformed password digest"):
        super().__init__(message, code="MALFORMED_DIGEST")


class MissingIdentityError(RuntimeError):
    """
    A handler asked for the current user on a route the auth gate does not
    guard. This is a wiring bug, not a client error.
    """

    pass
