"""
Users module.

Credential record persistence and user management.

Public API:
- IUserRepository: Store contract used by the auth module
- IUserService: User management operations
- InMemoryUserRepository: In-process store
  (SupabaseUserRepository lives in .repository and pulls in the client libs)
- Users exceptions: UserNotFoundError, DuplicateEmailError, StorageError
"""

from .interfaces import IUserRepository, IUserService
from .models import (
    UserRecord,
    NewUser,
    UserSummary,
    CreateUserRequest,
    UpdateUserRequest,
    UserPage,
)
from .exceptions import UserNotFoundError, DuplicateEmailError, StorageError
from .memory import InMemoryUserRepository

__all__ = [
    # Interfaces
    "IUserRepository",
    "IUserService",
    # Stores
    "InMemoryUserRepository",
    # Models
    "UserRecord",
    "NewUser",
    "UserSummary",
    "CreateUserRequest",
    "UpdateUserRequest",
    "UserPage",
    # Exceptions
    "UserNotFoundError",
    "DuplicateEmailError",
    "StorageError",
]
