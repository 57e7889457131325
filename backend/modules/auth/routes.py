"""
Auth API endpoints.

Public routes for registration and login. Route prefix: /api/v1/auth
"""

from fastapi import APIRouter, Depends, status

from api.dependencies import get_credential_service
from api.models.responses import APIResponse

from .interfaces import ICredentialService
from .models import AuthResult, LoginRequest, RegisterRequest

router = APIRouter()


@router.post(
    "/register",
    response_model=APIResponse[AuthResult],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: RegisterRequest,
    service: ICredentialService = Depends(get_credential_service),
) -> APIResponse[AuthResult]:
    """
    Register a new user and return a bearer token for it.

    409 if the email is already registered.
    """
    result = await service.register(request)
    return APIResponse(message="User registered successfully", data=result)


@router.post("/login", response_model=APIResponse[AuthResult])
async def login(
    request: LoginRequest,
    service: ICredentialService = Depends(get_credential_service),
) -> APIResponse[AuthResult]:
    """
    Exchange email and password for a bearer token.

    Unknown email and wrong password both answer 401 "invalid credentials".
    """
    result = await service.login(request)
    return APIResponse(message="Login successful", data=result)
