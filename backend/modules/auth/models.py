"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime, timezone
from typing import Literal
from pydantic import BaseModel, EmailStr, Field, field_validator

from modules.users.models import UserSummary
from shared.validators import check_password_bytes


class TokenClaims(BaseModel):
    """
    Claims carried by a session token.

    Timestamps are JWT NumericDates (integer Unix seconds).
    """

    sub: str = Field(..., min_length=1, description="Subject (user ID)")
    email: str = Field(..., description="User's email")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")

    model_config = {"frozen": True}

    @property
    def issued_at(self) -> datetime:
        return datetime.fromtimestamp(self.iat, tz=timezone.utc)

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)


class RegisterRequest(BaseModel):
    """Registration payload. Validated before it reaches the service."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=1, max_length=255)

    password_within_limit = field_validator("password")(check_password_bytes)


class LoginRequest(BaseModel):
    """Login payload."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class AuthResult(BaseModel):
    """Returned by register and login: who the user is plus a bearer token."""

    user: UserSummary
    token: str
    token_type: Literal["Bearer"] = "Bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
