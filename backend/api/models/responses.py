"""
Success response envelopes.

Every successful endpoint wraps its payload as
``{"success": true, "message": ..., "data": ...}``; list endpoints add a
``pagination`` block.
"""

from typing import Generic, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Envelope for a single payload."""

    success: bool = True
    message: str
    data: Optional[T] = None


class PaginationMeta(BaseModel):
    current_page: int
    per_page: int
    total: int
    total_pages: int


class PaginatedResponse(BaseModel, Generic[T]):
    """Envelope for one page of a collection."""

    success: bool = True
    message: str
    data: list[T]
    pagination: PaginationMeta
