"""Tests for the service container."""

import pytest
from datetime import timedelta
from unittest.mock import MagicMock, patch

from api.dependencies import (
    ServiceContainer,
    get_container,
    get_credential_service,
    get_request_gate,
    get_user_service,
    reset_container,
)
from modules.auth.gate import Continue, Reject
from modules.auth.interfaces import ICredentialService
from modules.users.interfaces import IUserRepository, IUserService
from modules.users.memory import InMemoryUserRepository
from modules.users.repository import SupabaseUserRepository
from shared.config import Settings

SECRET = "container-test-secret-with-enough-bytes"


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret=SECRET, bcrypt_rounds=4, jwt_expiration_seconds=120)


class TestServiceContainer:
    def test_defaults_to_memory_store(self, settings):
        container = ServiceContainer(settings)
        assert isinstance(container.user_repository, InMemoryUserRepository)
        assert isinstance(container.user_repository, IUserRepository)

    def test_supabase_store(self):
        settings = Settings(jwt_secret=SECRET, user_store_backend="supabase", users_table="accounts")
        with patch("shared.database.get_supabase_client", return_value=MagicMock()) as get_client:
            container = ServiceContainer(settings)
            repository = container.user_repository

        assert isinstance(repository, SupabaseUserRepository)
        assert repository.table_name == "accounts"
        get_client.assert_called_once()

    def test_services_share_one_store(self, settings):
        container = ServiceContainer(settings)
        assert container.credentials._users is container.user_repository
        assert container.users._users is container.user_repository

    def test_settings_flow_into_components(self, settings):
        container = ServiceContainer(settings)
        assert container.password_hasher.rounds == 4
        assert container.credentials._token_ttl == timedelta(seconds=120)
        assert container.credentials._secret == SECRET

    def test_services_satisfy_interfaces(self, settings):
        container = ServiceContainer(settings)
        assert isinstance(container.credentials, ICredentialService)
        assert isinstance(container.users, IUserService)

    def test_services_are_cached(self, settings):
        container = ServiceContainer(settings)
        assert container.credentials is container.credentials
        assert container.gate is container.gate

    def test_reset(self, settings):
        container = ServiceContainer(settings)
        first = container.user_repository
        container.reset()
        assert container.user_repository is not first

    def test_gate_uses_same_secret_as_issuer(self, settings):
        container = ServiceContainer(settings)
        token = container.token_codec.issue("42", "a@example.com", SECRET, timedelta(minutes=1))

        assert isinstance(container.gate.evaluate(f"Bearer {token}"), Continue)

        other = container.token_codec.issue("42", "a@example.com", "other", timedelta(minutes=1))
        assert isinstance(container.gate.evaluate(f"Bearer {other}"), Reject)


class TestContainerSingleton:
    def test_get_container_is_singleton(self):
        assert get_container() is get_container()

    def test_reset_container(self):
        first = get_container()
        reset_container()
        assert get_container() is not first

    def test_dependency_functions(self):
        container = get_container()
        assert get_credential_service() is container.credentials
        assert get_user_service() is container.users
        assert get_request_gate() is container.gate
