"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import (
    get_credential_service,
    get_request_gate,
    get_user_service,
    reset_container,
)
from modules.auth.gate import RequestGate
from modules.auth.password import PasswordHasher
from modules.auth.service import CredentialService
from modules.auth.tokens import TokenCodec
from modules.users.memory import InMemoryUserRepository
from modules.users.service import UserService
from shared.config import get_settings


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

# Lowest cost bcrypt accepts; keeps hashing fast in tests
TEST_BCRYPT_ROUNDS = 4

TEST_TOKEN_TTL = timedelta(hours=1)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the service container around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def secret() -> str:
    return TEST_JWT_SECRET


@pytest.fixture
def now() -> datetime:
    """A fixed point in time for token tests."""
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def credential_service(user_repository, hasher, codec, secret) -> CredentialService:
    return CredentialService(
        users=user_repository,
        hasher=hasher,
        codec=codec,
        secret=secret,
        token_ttl=TEST_TOKEN_TTL,
    )


@pytest.fixture
def user_service(user_repository, hasher) -> UserService:
    return UserService(repository=user_repository, hasher=hasher)


@pytest.fixture
def gate(codec, secret) -> RequestGate:
    return RequestGate(codec=codec, secret=secret)


@pytest.fixture
def app(credential_service, user_service, gate):
    """Application wired to in-memory services sharing one user store."""
    application = create_app()
    application.dependency_overrides[get_credential_service] = lambda: credential_service
    application.dependency_overrides[get_user_service] = lambda: user_service
    application.dependency_overrides[get_request_gate] = lambda: gate
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_token(codec, secret) -> str:
    """A valid token for a user that is not in the store."""
    return codec.issue("test-user-123", "test@example.com", secret, TEST_TOKEN_TTL)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
