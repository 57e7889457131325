"""
Authentication module.

Password hashing, session tokens, registration/login and the bearer-token
gate for protected routes.

Public API:
- ICredentialService: Interface for register/login
- PasswordHasher: bcrypt hashing and verification
- TokenCodec: JWT issuing and verification
- RequestGate, Continue, Reject: Per-request token check
- Auth models: TokenClaims, RegisterRequest, LoginRequest, AuthResult
- Auth exceptions: InvalidCredentialsError, UnauthenticatedError, etc.
"""

from .interfaces import ICredentialService
from .models import TokenClaims, RegisterRequest, LoginRequest, AuthResult
from .password import PasswordHasher
from .tokens import TokenCodec
from .gate import RequestGate, Continue, Reject, GateDecision
from .exceptions import (
    InvalidCredentialsError,
    UnauthenticatedError,
    TokenError,
    MalformedTokenError,
    BadSignatureError,
    TokenExpiredError,
    SigningError,
    TokenIssuanceError,
    HashingError,
    MalformedDigestError,
    PasswordTooLongError,
    MissingIdentityError,
)

__all__ = [
    # Interface
    "ICredentialService",
    # Components
    "PasswordHasher",
    "TokenCodec",
    "RequestGate",
    "Continue",
    "Reject",
    "GateDecision",
    # Models
    "TokenClaims",
    "RegisterRequest",
    "LoginRequest",
    "AuthResult",
    # Exceptions
    "InvalidCredentialsError",
    "UnauthenticatedError",
    "TokenError",
    "MalformedTokenError",
    "BadSignatureError",
    "TokenExpiredError",
    "SigningError",
    "TokenIssuanceError",
    "HashingError",
    "MalformedDigestError",
    "PasswordTooLongError",
    "MissingIdentityError",
]
