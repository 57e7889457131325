"""
Authentication module interface.

The API layer depends on ICredentialService, not the concrete
implementation. This enables testing with mocks.
"""

from typing import Protocol, runtime_checkable

from .models import AuthResult, LoginRequest, RegisterRequest


@runtime_checkable
class ICredentialService(Protocol):
    """
    Interface for password-based registration and login.

    Both operations return the user's summary together with a freshly
    issued bearer token.
    """

    async def register(self, request: RegisterRequest) -> AuthResult:
        """
        Create an account and sign the user in.

        Args:
            request: Pre-validated email, password and display name

        Returns:
            AuthResult for the new user

        Raises:
            DuplicateEmailError: If the email is already registered
            StorageError: If the user store fails
            HashingError: If the password cannot be hashed
            TokenIssuanceError: If the token cannot be signed
        """
        ...

    async def login(self, request: LoginRequest) -> AuthResult:
        """
        Verify credentials and sign the user in.

        Args:
            request: Pre-validated email and password

        Returns:
            AuthResult for the matching user

        Raises:
            InvalidCredentialsError: Unknown email or wrong password (same error)
            StorageError: If the user store fails
            TokenIssuanceError: If the token cannot be signed
        """
        ...
