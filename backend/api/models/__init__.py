"""API models package."""

from .errors import ErrorResponse, ValidationErrorResponse
from .responses import APIResponse, PaginationMeta, PaginatedResponse

__all__ = [
    "ErrorResponse",
    "ValidationErrorResponse",
    "APIResponse",
    "PaginationMeta",
    "PaginatedResponse",
]
