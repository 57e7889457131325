"""
In-memory user store.

Used for tests and local development (USER_STORE_BACKEND=memory). A lock
makes check-then-insert atomic, so the store enforces email uniqueness the
same way a unique index would.
"""

import threading
import uuid
from datetime import datetime, timezone
from typing import Optional

from .exceptions import DuplicateEmailError, UserNotFoundError
from .models import NewUser, UserRecord


class InMemoryUserRepository:
    """Dict-backed implementation of IUserRepository."""

    def __init__(self) -> None:
        self._records: dict[str, UserRecord] = {}
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        with self._lock:
            return self._active_by_email(email)

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        with self._lock:
            record = self._records.get(user_id)
            if record is None or record.is_deleted:
                return None
            return record

    def create(self, user: NewUser) -> UserRecord:
        now = datetime.now(timezone.utc)
        with self._lock:
            if self._active_by_email(user.email) is not None:
                raise DuplicateEmailError()
            record = UserRecord(
                id=str(uuid.uuid4()),
                email=user.email,
                password_hash=user.password_hash,
                name=user.name,
                created_at=now,
                updated_at=now,
            )
            self._records[record.id] = record
            return record

    def update(self, record: UserRecord) -> UserRecord:
        with self._lock:
            current = self._records.get(record.id)
            if current is None or current.is_deleted:
                raise UserNotFoundError(record.id)
            holder = self._active_by_email(record.email)
            if holder is not None and holder.id != record.id:
                raise DuplicateEmailError()
            updated = current.model_copy(
                update={
                    "email": record.email,
                    "name": record.name,
                    "password_hash": record.password_hash,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            self._records[record.id] = updated
            return updated

    def delete(self, user_id: str) -> None:
        with self._lock:
            current = self._records.get(user_id)
            if current is None or current.is_deleted:
                raise UserNotFoundError(user_id)
            now = datetime.now(timezone.utc)
            self._records[user_id] = current.model_copy(
                update={"deleted_at": now, "updated_at": now}
            )

    def list_users(self, limit: int, offset: int) -> tuple[list[UserRecord], int]:
        with self._lock:
            active = [r for r in self._records.values() if not r.is_deleted]
        active.sort(key=lambda r: r.created_at)
        return active[offset:offset + limit], len(active)

    def _active_by_email(self, email: str) -> Optional[UserRecord]:
        """Caller must hold the lock."""
        for record in self._records.values():
            if record.email == email and not record.is_deleted:
                return record
        return None
