"""
DevConnector Backend — FastAPI Dependencies
=============================================

What:  Wires settings, repositories and services into route handlers, and
       hosts the Auth Gate (`get_current_identity`).
How:   Process-wide objects (settings, token service, password hasher) live on
       `app.state` and are read from the request. Repositories and services are
       built per request around the request's database session.
Who:   Route handlers declare the Annotated aliases at the bottom of this module.

Auth Gate:
    1. Read the `x-auth-token` header; missing/blank → NoTokenError (401)
    2. TokenService.verify → InvalidTokenError / ExpiredTokenError (401)
    3. Store the user id on `request.state.user_id` and return an Identity

    FastAPI resolves dependencies before it validates the request body, so an
    unauthenticated request is rejected with 401 even when its body is invalid.
    A body that is not JSON at all fails while FastAPI is still decoding it,
    before any dependency runs; the RequestValidationError handler in main.py
    runs `authenticate` itself for routes where `requires_identity` is true.
"""

import uuid
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.dependencies.models import Dependant
from sqlalchemy.ext.asyncio import AsyncSession

from devconnector.config import Settings
from devconnector.database import get_db_session
from devconnector.exceptions import InvalidTokenError, NoTokenError
from devconnector.repositories.base import coerce_uuid
from devconnector.repositories.posts import PostRepository
from devconnector.repositories.profiles import ProfileRepository
from devconnector.repositories.users import UserRepository
from devconnector.services.auth_service import AuthService
from devconnector.services.passwords import PasswordHasher
from devconnector.services.post_service import PostService
from devconnector.services.profile_service import ProfileService
from devconnector.services.token_service import TokenService

TOKEN_HEADER = "x-auth-token"


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, as established by the Auth Gate."""
    user_id: uuid.UUID


async def get_settings(request: Request) -> Settings:
    """Get settings from app state"""
    return request.app.state.settings


async def get_token_service(request: Request) -> TokenService:
    """Get token service from app state"""
    return request.app.state.token_service


async def get_password_hasher(request: Request) -> PasswordHasher:
    """Get password hasher from app state"""
    return request.app.state.password_hasher


def authenticate(request: Request, tokens: TokenService) -> Identity:
    """
    Verify the x-auth-token header and return the caller's identity.

    Raises:
        NoTokenError, InvalidTokenError, ExpiredTokenError
    """
    token = request.headers.get(TOKEN_HEADER, "").strip()
    if not token:
        raise NoTokenError()

    user_id = coerce_uuid(tokens.verify(token))
    if user_id is None:
        raise InvalidTokenError(context={"reason": "user id is not a UUID"})

    request.state.user_id = str(user_id)
    return Identity(user_id=user_id)


async def get_current_identity(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    return authenticate(request, tokens)


def requires_identity(dependant: Dependant) -> bool:
    """True if the Auth Gate appears anywhere in `dependant`'s dependency tree."""
    return any(
        sub.call is get_current_identity or requires_identity(sub)
        for sub in dependant.dependencies
    )


DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_user_repository(db: DbSession) -> UserRepository:
    return UserRepository(db)


async def get_post_repository(db: DbSession) -> PostRepository:
    return PostRepository(db)


async def get_profile_repository(db: DbSession) -> ProfileRepository:
    return ProfileRepository(db)


async def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    passwords: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(users, passwords, tokens)


async def get_post_service(
    posts: PostRepository = Depends(get_post_repository),
    users: UserRepository = Depends(get_user_repository),
) -> PostService:
    return PostService(posts, users)


async def get_profile_service(
    profiles: ProfileRepository = Depends(get_profile_repository),
    users: UserRepository = Depends(get_user_repository),
    posts: PostRepository = Depends(get_post_repository),
) -> ProfileService:
    return ProfileService(profiles, users, posts)


# Type annotations for dependency injection
CurrentUser = Annotated[Identity, Depends(get_current_identity)]
AppSettings = Annotated[Settings, Depends(get_settings)]
Auth = Annotated[AuthService, Depends(get_auth_service)]
Posts = Annotated[PostService, Depends(get_post_service)]
Profiles = Annotated[ProfileService, Depends(get_profile_service)]
