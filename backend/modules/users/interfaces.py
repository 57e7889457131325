"""
Users module interfaces.

The auth module depends on IUserRepository only; any store that satisfies
it can back registration and login. Stores MUST enforce email uniqueness
themselves (a unique index or an equivalent atomic check): the service-level
existence check alone races under concurrent registrations.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import (
    CreateUserRequest,
    NewUser,
    UpdateUserRequest,
    UserPage,
    UserRecord,
    UserSummary,
)


@runtime_checkable
class IUserRepository(Protocol):
    """
    Persistence contract for credential records.

    Reads never return soft-deleted records. "Not found" is ``None``;
    every other failure raises ``StorageError``.
    """

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        """Exact (case-sensitive) lookup of an active user by email."""
        ...

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        """Lookup of an active user by ID."""
        ...

    def create(self, user: NewUser) -> UserRecord:
        """
        Insert a new record.

        Raises:
            DuplicateEmailError: If an active user already has this email
            StorageError: On any other store failure
        """
        ...

    def update(self, record: UserRecord) -> UserRecord:
        """
        Persist changes to email, name and password hash.

        Raises:
            UserNotFoundError: If the record no longer exists
            DuplicateEmailError: If the new email belongs to another user
            StorageError: On any other store failure
        """
        ...

    def delete(self, user_id: str) -> None:
        """
        Soft-delete a record.

        Raises:
            UserNotFoundError: If no active user has this ID
        """
        ...

    def list_users(self, limit: int, offset: int) -> tuple[list[UserRecord], int]:
        """Return one page of active users (oldest first) and the total count."""
        ...


@runtime_checkable
class IUserService(Protocol):
    """Interface for user management operations exposed to the API layer."""

    async def create_user(self, request: CreateUserRequest) -> UserSummary:
        ...

    async def get_user(self, user_id: str) -> UserSummary:
        ...

    async def list_users(self, page: int, per_page: int) -> UserPage:
        ...

    async def update_user(self, user_id: str, request: UpdateUserRequest) -> UserSummary:
        ...

    async def delete_user(self, user_id: str) -> None:
        ...
