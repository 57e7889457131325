"""
User management endpoints.

Every route in this group requires a bearer token. Route prefix: /api/v1/users
"""

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_user_service
from api.middleware.auth import CurrentUser, RequireAuth
from api.models.responses import APIResponse, PaginatedResponse, PaginationMeta
from shared.models import AuthenticatedUser

from .interfaces import IUserService
from .models import CreateUserRequest, UpdateUserRequest, UserSummary

router = APIRouter(dependencies=[RequireAuth])


@router.get("", response_model=PaginatedResponse[UserSummary])
async def list_users(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    per_page: int = Query(default=10, ge=1, le=100, description="Items per page"),
    service: IUserService = Depends(get_user_service),
) -> PaginatedResponse[UserSummary]:
    """List active users, oldest first."""
    result = await service.list_users(page, per_page)
    return PaginatedResponse(
        message="Users retrieved successfully",
        data=result.users,
        pagination=PaginationMeta(
            current_page=result.page,
            per_page=result.per_page,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


@router.get("/me", response_model=APIResponse[UserSummary])
async def get_me(
    user: AuthenticatedUser = CurrentUser,
    service: IUserService = Depends(get_user_service),
) -> APIResponse[UserSummary]:
    """Profile of the user the token was issued to."""
    summary = await service.get_user(user.id)
    return APIResponse(message="User retrieved successfully", data=summary)


@router.get("/{user_id}", response_model=APIResponse[UserSummary])
async def get_user(
    user_id: str,
    service: IUserService = Depends(get_user_service),
) -> APIResponse[UserSummary]:
    summary = await service.get_user(user_id)
    return APIResponse(message="User retrieved successfully", data=summary)


@router.post("", response_model=APIResponse[UserSummary], status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    service: IUserService = Depends(get_user_service),
) -> APIResponse[UserSummary]:
    summary = await service.create_user(request)
    return APIResponse(message="User created successfully", data=summary)


@router.put("/{user_id}", response_model=APIResponse[UserSummary])
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    service: IUserService = Depends(get_user_service),
) -> APIResponse[UserSummary]:
    """Change email and/or name. A new email must not belong to another user."""
    summary = await service.update_user(user_id, request)
    return APIResponse(message="User updated successfully", data=summary)


@router.delete("/{user_id}", response_model=APIResponse[None])
async def delete_user(
    user_id: str,
    service: IUserService = Depends(get_user_service),
) -> APIResponse[None]:
    """Soft-delete a user. Their tokens stay valid until they expire."""
    await service.delete_user(user_id)
    return APIResponse(message="User deleted successfully")
