"""
DevConnector Backend — Profile Route Handlers
===============================================

What:  Developer profiles. Reading all profiles or one user's profile is
       public; everything scoped to "me" requires a token.
"""

from typing import List

from fastapi import APIRouter

from devconnector.dependencies import CurrentUser, Profiles
from devconnector.schemas.common import ErrorResponse, MessageResponse
from devconnector.schemas.profile import ProfileResponse, ProfileUpsert

router = APIRouter(prefix="/api/profile", tags=["Profile"])

_AUTH = {401: {"description": "Missing, invalid or expired token", "model": ErrorResponse}}


@router.get(
    "/me",
    response_model=ProfileResponse,
    responses={**_AUTH, 400: {"description": "No profile for this user", "model": ErrorResponse}},
    summary="Get current user's profile",
)
async def get_my_profile(identity: CurrentUser, profiles: Profiles) -> ProfileResponse:
    return await profiles.get_own_profile(identity.user_id)


@router.post(
    "",
    response_model=ProfileResponse,
    responses={**_AUTH, 400: {"description": "Status and skills are required", "model": ErrorResponse}},
    summary="Create or update current user's profile",
)
async def upsert_profile(
    identity: CurrentUser,
    data: ProfileUpsert,
    profiles: Profiles,
) -> ProfileResponse:
    return await profiles.upsert_profile(identity.user_id, data)


@router.get("", response_model=List[ProfileResponse], summary="Get all profiles")
async def list_profiles(profiles: Profiles) -> List[ProfileResponse]:
    return await profiles.list_profiles()


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    responses={400: {"description": "Profile not found", "model": ErrorResponse}},
    summary="Get profile by user ID",
)
async def get_profile_by_user(user_id: str, profiles: Profiles) -> ProfileResponse:
    return await profiles.get_profile_by_user(user_id)


@router.delete(
    "",
    response_model=MessageResponse,
    responses=_AUTH,
    summary="Delete current user's profile, posts and account",
)
async def delete_account(identity: CurrentUser, profiles: Profiles) -> MessageResponse:
    return await profiles.delete_account(identity.user_id)
