"""
Bearer authentication for route groups.

Adapts the RequestGate to FastAPI. Apply ``RequireAuth`` to a router (or a
single route) and read the identity in handlers with ``CurrentUser``.

Usage:
    router = APIRouter(dependencies=[RequireAuth])

    @router.get("/me")
    async def me(user: AuthenticatedUser = CurrentUser):
        return {"user_id": user.id}
"""

from fastapi import Depends, Request

from modules.auth.exceptions import MissingIdentityError, UnauthenticatedError
from modules.auth.gate import Reject, RequestGate
from shared.models import AuthenticatedUser

from ..dependencies import get_request_gate


async def authenticate_request(
    request: Request,
    gate: RequestGate = Depends(get_request_gate),
) -> AuthenticatedUser:
    """
    Dependency that requires a valid bearer token.

    A rejection raises UnauthenticatedError, which the error handlers turn
    into a 401 before the route handler runs.
    """
    decision = gate.evaluate(request.headers.get("Authorization"))
    if isinstance(decision, Reject):
        raise UnauthenticatedError(decision.message)

    request.state.identity = decision.identity
    return decision.identity


def get_current_user(request: Request) -> AuthenticatedUser:
    """
    Identity attached by ``authenticate_request``.

    Raises:
        MissingIdentityError: The route is not behind RequireAuth
    """
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise MissingIdentityError(
            f"{request.method} {request.url.path} reads the current user "
            "but is not protected by RequireAuth"
        )
    return identity


# Type aliases for cleaner route definitions
RequireAuth = Depends(authenticate_request)
CurrentUser = Depends(get_current_user)
