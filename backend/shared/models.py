"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    The identity resolved from a verified bearer token.

    Attached to the request state by the auth gate and read by route
    handlers through ``get_current_user``. Lives for one request.
    """

    id: str = Field(..., description="User ID (token subject)")
    email: str = Field(..., description="Email address carried in the token")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }
