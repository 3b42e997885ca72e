"""
DevConnector Backend — Auth Route Handlers
============================================

What:  GET /api/auth (who am I) and POST /api/auth (login).
Who:   Called by the frontend on page load (loadUser) and by the login form.
"""

from fastapi import APIRouter

from devconnector.dependencies import Auth, CurrentUser
from devconnector.schemas.auth import LoginRequest, TokenResponse, UserResponse
from devconnector.schemas.common import ErrorResponse

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.get(
    "",
    response_model=UserResponse,
    responses={
        401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
        404: {"description": "Account no longer exists", "model": ErrorResponse},
    },
    summary="Get the authenticated user",
)
async def get_authenticated_user(identity: CurrentUser, auth: Auth) -> UserResponse:
    return await auth.current_user(str(identity.user_id))


@router.post(
    "",
    response_model=TokenResponse,
    responses={
        400: {"description": "Validation failed or invalid credentials", "model": ErrorResponse},
    },
    summary="Authenticate user and get token",
)
async def login(credentials: LoginRequest, auth: Auth) -> TokenResponse:
    """
    Exchange email and password for a token.

    An unknown email and a wrong password produce the same 400 response.
    """
    return await auth.login(credentials)
