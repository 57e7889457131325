"""
Users module data models.

``UserRecord`` is what the stores persist. ``UserSummary`` is the only
shape that ever leaves the backend; it never carries the password hash.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from shared.validators import check_password_bytes


class UserRecord(BaseModel):
    """A persisted credential record."""

    id: str = Field(..., description="User ID assigned by the store")
    email: str = Field(..., description="Unique among active users, case-sensitive")
    password_hash: str = Field(..., description="bcrypt digest")
    name: str = Field(..., description="Display name")
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = Field(None, description="Soft-delete marker")

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class NewUser(BaseModel):
    """Fields supplied when creating a record; the store assigns the rest."""

    email: str
    password_hash: str
    name: str


class UserSummary(BaseModel):
    """Public view of a user."""

    id: str
    email: str
    name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserSummary":
        return cls(
            id=record.id,
            email=record.email,
            name=record.name,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class CreateUserRequest(BaseModel):
    """Request body for POST /users."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=1, max_length=255)

    password_within_limit = field_validator("password")(check_password_bytes)


class UpdateUserRequest(BaseModel):
    """Request body for PUT /users/{id}. Omitted fields are left unchanged."""

    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)


class UserPage(BaseModel):
    """One page of users plus the total count of active users."""

    users: list[UserSummary]
    total: int
    page: int
    per_page: int

    @property
    def total_pages(self) -> int:
        pages, remainder = divmod(self.total, self.per_page)
        return pages + 1 if remainder else pages
