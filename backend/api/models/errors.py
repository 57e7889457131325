"""
Error response models.

Standardized error responses for the API.
"""

from typing import Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = False
    message: str
    error: Optional[str] = None
    details: Optional[dict[str, Any]] = None


class ValidationErrorResponse(BaseModel):
    """Validation error response format: one message per offending field."""

    success: bool = False
    message: str = "Validation failed"
    error: str = "VALIDATION_FAILED"
    details: dict[str, str]
