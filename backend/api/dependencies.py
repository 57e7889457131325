"""
Dependency injection setup for FastAPI.

This module is the composition root: it is the only place that reads
Settings and turns them into constructor arguments (secret, token TTL,
bcrypt cost, which user store to use). Everything else receives plain
values.
"""

from typing import TYPE_CHECKING

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.gate import RequestGate
    from modules.auth.interfaces import ICredentialService
    from modules.auth.password import PasswordHasher
    from modules.auth.tokens import TokenCodec
    from modules.users.interfaces import IUserRepository, IUserService


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached for the
    lifetime of the container. Use reset() to clear them for testing.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._user_repository: "IUserRepository | None" = None
        self._password_hasher: "PasswordHasher | None" = None
        self._token_codec: "TokenCodec | None" = None
        self._credential_service: "ICredentialService | None" = None
        self._user_service: "IUserService | None" = None
        self._request_gate: "RequestGate | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the user store selected by USER_STORE_BACKEND."""
        if self._user_repository is None:
            if self.settings.user_store_backend == "supabase":
                from modules.users.repository import SupabaseUserRepository
                from shared.database import get_supabase_client
                self._user_repository = SupabaseUserRepository(
                    get_supabase_client(), table=self.settings.users_table
                )
            else:
                from modules.users.memory import InMemoryUserRepository
                self._user_repository = InMemoryUserRepository()
        return self._user_repository

    @property
    def password_hasher(self) -> "PasswordHasher":
        if self._password_hasher is None:
            from modules.auth.password import PasswordHasher
            self._password_hasher = PasswordHasher(rounds=self.settings.bcrypt_rounds)
        return self._password_hasher

    @property
    def token_codec(self) -> "TokenCodec":
        if self._token_codec is None:
            from modules.auth.tokens import TokenCodec
            self._token_codec = TokenCodec()
        return self._token_codec

    @property
    def credentials(self) -> "ICredentialService":
        """Get the credential (register/login) service instance."""
        if self._credential_service is None:
            from modules.auth.service import CredentialService
            self._credential_service = CredentialService(
                users=self.user_repository,
                hasher=self.password_hasher,
                codec=self.token_codec,
                secret=self.settings.jwt_secret,
                token_ttl=self.settings.jwt_expiration,
            )
        return self._credential_service

    @property
    def users(self) -> "IUserService":
        """Get the user management service instance."""
        if self._user_service is None:
            from modules.users.service import UserService
            self._user_service = UserService(
                repository=self.user_repository,
                hasher=self.password_hasher,
            )
        return self._user_service

    @property
    def gate(self) -> "RequestGate":
        """Get the bearer-token gate for protected routes."""
        if self._request_gate is None:
            from modules.auth.gate import RequestGate
            self._request_gate = RequestGate(
                codec=self.token_codec,
                secret=self.settings.jwt_secret,
            )
        return self._request_gate

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different settings.
        """
        self._user_repository = None
        self._password_hasher = None
        self._token_codec = None
        self._credential_service = None
        self._user_service = None
        self._request_gate = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() builds a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_credential_service() -> "ICredentialService":
    """FastAPI dependency for the credential service."""
    return get_container().credentials


def get_user_service() -> "IUserService":
    """FastAPI dependency for the user service."""
    return get_container().users


def get_request_gate() -> "RequestGate":
    """FastAPI dependency for the auth gate."""
    return get_container().gate
