"""
DevConnector Backend — User Registration Route
================================================

What:  POST /api/users creates an account and returns a token for it.
"""

from fastapi import APIRouter

from devconnector.dependencies import Auth
from devconnector.schemas.auth import RegisterRequest, TokenResponse
from devconnector.schemas.common import ErrorResponse

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post(
    "",
    status_code=201,
    response_model=TokenResponse,
    responses={
        400: {"description": "Validation failed or user already exists", "model": ErrorResponse},
    },
    summary="Register user",
)
async def register(data: RegisterRequest, auth: Auth) -> TokenResponse:
    return await auth.register(data)
