"""
User management service.

CRUD over the user store for the protected /users routes. Passwords set
here go through the same hasher as registration.
"""

import logging

from fastapi.concurrency import run_in_threadpool

from modules.auth.password import PasswordHasher

from .exceptions import DuplicateEmailError, UserNotFoundError
from .interfaces import IUserRepository, IUserService
from .models import (
    CreateUserRequest,
    NewUser,
    UpdateUserRequest,
    UserPage,
    UserSummary,
)

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """Implements IUserService on top of any IUserRepository."""

    def __init__(self, repository: IUserRepository, hasher: PasswordHasher):
        self._users = repository
        self._hasher = hasher

    async def create_user(self, request: CreateUserRequest) -> UserSummary:
        """Create a user; the email must not belong to another active user."""
        if self._users.find_by_email(request.email) is not None:
            raise DuplicateEmailError()

        password_hash = await run_in_threadpool(self._hasher.hash, request.password)
        record = self._users.create(
            NewUser(email=request.email, password_hash=password_hash, name=request.name)
        )
        logger.info("Created user %s", record.id)
        return UserSummary.from_record(record)

    async def get_user(self, user_id: str) -> UserSummary:
        record = self._users.find_by_id(user_id)
        if record is None:
            raise UserNotFoundError(user_id)
        return UserSummary.from_record(record)

    async def list_users(self, page: int, per_page: int) -> UserPage:
        offset = (page - 1) * per_page
        records, total = self._users.list_users(limit=per_page, offset=offset)
        return UserPage(
            users=[UserSummary.from_record(r) for r in records],
            total=total,
            page=page,
            per_page=per_page,
        )

    async def update_user(self, user_id: str, request: UpdateUserRequest) -> UserSummary:
        """
        Apply the provided fields to an existing user.

        Raises:
            UserNotFoundError: If the user does not exist
            DuplicateEmailError: If the new email is taken by another user
        """
        record = self._users.find_by_id(user_id)
        if record is None:
            raise UserNotFoundError(user_id)

        changes: dict[str, str] = {}
        if request.email is not None and request.email != record.email:
            holder = self._users.find_by_email(request.email)
            if holder is not None and holder.id != user_id:
                raise DuplicateEmailError()
            changes["email"] = request.email
        if request.name is not None:
            changes["name"] = request.name

        if not changes:
            return UserSummary.from_record(record)

        updated = self._users.update(record.model_copy(update=changes))
        logger.info("Updated user %s (%s)", user_id, ", ".join(sorted(changes)))
        return UserSummary.from_record(updated)

    async def delete_user(self, user_id: str) -> None:
        self._users.delete(user_id)
        logger.info("Deleted user %s", user_id)
