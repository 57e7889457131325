"""
Supabase user repository.

Stores credential records in a PostgREST-exposed table. Expected schema:

    create table users (
        id uuid primary key default gen_random_uuid(),
        email text not null,
        password_hash text not null,
        name text not null,
        created_at timestamptz not null default now(),
        updated_at timestamptz not null default now(),
        deleted_at timestamptz
    );
    create unique index users_email_active_key on users (email)
        where deleted_at is null;

The partial unique index is what makes concurrent registrations with the
same email safe; violations surface here as PostgreSQL error 23505.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError

from shared.repository import BaseRepository
from .exceptions import DuplicateEmailError, StorageError, UserNotFoundError
from .models import NewUser, UserRecord

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


class SupabaseUserRepository(BaseRepository[UserRecord]):
    """
    IUserRepository backed by Supabase.

    Every PostgREST or transport failure is re-raised as ``StorageError``
    (or ``DuplicateEmailError`` for unique violations); "not found" is
    ``None``.
    """

    table_name = "users"

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        result = self._execute(
            "find_by_email",
            self._table().select("*").eq("email", email).is_("deleted_at", "null").limit(1),
        )
        return self._map_to_record(result.data[0]) if result.data else None

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        result = self._execute(
            "find_by_id",
            self._table().select("*").eq("id", user_id).is_("deleted_at", "null").limit(1),
        )
        return self._map_to_record(result.data[0]) if result.data else None

    def create(self, user: NewUser) -> UserRecord:
        result = self._execute("create", self._table().insert(user.model_dump()))
        if not result.data:
            raise StorageError("insert returned no row")
        return self._map_to_record(result.data[0])

    def update(self, record: UserRecord) -> UserRecord:
        data = {
            "email": record.email,
            "name": record.name,
            "password_hash": record.password_hash,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        result = self._execute(
            "update",
            self._table().update(data).eq("id", record.id).is_("deleted_at", "null"),
        )
        if not result.data:
            raise UserNotFoundError(record.id)
        return self._map_to_record(result.data[0])

    def delete(self, user_id: str) -> None:
        now = datetime.now(timezone.utc).isoformat()
        result = self._execute(
            "delete",
            self._table()
            .update({"deleted_at": now, "updated_at": now})
            .eq("id", user_id)
            .is_("deleted_at", "null"),
        )
        if not result.data:
            raise UserNotFoundError(user_id)

    def list_users(self, limit: int, offset: int) -> tuple[list[UserRecord], int]:
        result = self._execute(
            "list_users",
            self._table()
            .select("*", count="exact")
            .is_("deleted_at", "null")
            .order("created_at")
            .range(offset, offset + limit - 1),
        )
        users = [self._map_to_record(row) for row in result.data]
        return users, result.count or 0

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _execute(self, operation: str, query: Any) -> Any:
        """Run a query, translating client errors into store errors."""
        try:
            return query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateEmailError() from e
            logger.error("User store %s failed: %s (code=%s)", operation, e.message, e.code)
            raise StorageError(f"{operation} failed") from e
        except httpx.HTTPError as e:
            logger.error("User store %s failed: %s", operation, e)
            raise StorageError(f"{operation} failed") from e

    def _map_to_record(self, data: dict[str, Any]) -> UserRecord:
        """Map database row to UserRecord model."""
        return UserRecord(
            id=str(data["id"]),
            email=data["email"],
            password_hash=data["password_hash"],
            name=data["name"],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
            deleted_at=data.get("deleted_at"),
        )
