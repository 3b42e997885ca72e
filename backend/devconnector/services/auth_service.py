"""
DevConnector Backend — Auth Service
=====================================

What:  Login, registration and current-user lookup.
How:   Composes UserRepository, PasswordHasher and TokenService, all passed in
       by the dependency layer.
Who:   Called by routes/auth.py and routes/users.py.

Login Flow (POST /api/auth):
    ┌──────────┐    ┌──────────────┐    ┌──────────────┐    ┌──────────┐
    │ Validate │───▶│ Find user by │───▶│ bcrypt check │───▶│  Issue   │
    │  (Route) │    │    email     │    │  (threadpool)│    │  token   │
    └──────────┘    └──────────────┘    └──────────────┘    └──────────┘
                      miss ─┐               mismatch ─┐
                            └── InvalidCredentialsError ◀┘
"""

import hashlib
import logging
import uuid
from datetime import datetime, timezone
from urllib.parse import urlencode

from devconnector.exceptions import InvalidCredentialsError, NotFoundError, UserExistsError
from devconnector.models.user import User
from devconnector.repositories.users import UserRepository
from devconnector.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from devconnector.services.passwords import PasswordHasher
from devconnector.services.token_service import TokenService

logger = logging.getLogger(__name__)


def gravatar_url(email: str) -> str:
    """Gravatar image for `email`: 200px, PG rated, mystery-man fallback."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": "200", "r": "pg", "d": "mm"})
    return f"//www.gravatar.com/avatar/{digest}?{query}"


class AuthService:

    def __init__(
        self,
        users: UserRepository,
        passwords: PasswordHasher,
        tokens: TokenService,
    ):
        self.users = users
        self.passwords = passwords
        self.tokens = tokens

    async def login(self, credentials: LoginRequest) -> TokenResponse:
        """
        Exchange email + password for a token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password (same error for both)
            DatabaseError: Lookup failed
        """
        user = await self.users.find_by_email(credentials.email)
        if user is None:
            logger.info("Login failed: no account for the given email")
            raise InvalidCredentialsError()

        if not await self.passwords.verify(credentials.password, user.password):
            logger.info("Login failed: password mismatch for user %s", user.id)
            raise InvalidCredentialsError()

        logger.info("User %s logged in", user.id)
        return TokenResponse(token=self.tokens.issue(user.id))

    async def register(self, data: RegisterRequest) -> TokenResponse:
        """
        Create an account and log it in.

        Raises:
            UserExistsError: Email already registered
        """
        if await self.users.find_by_email(data.email) is not None:
            raise UserExistsError()

        user = User(
            id=uuid.uuid4(),
            name=data.name,
            email=data.email,
            avatar=gravatar_url(data.email),
            password=await self.passwords.hash(data.password),
            created_at=datetime.now(timezone.utc),
        )
        await self.users.add(user)
        logger.info("Registered user %s", user.id)
        return TokenResponse(token=self.tokens.issue(user.id))

    async def current_user(self, user_id: str) -> UserResponse:
        """
        Resolve the Auth Gate identity to a user record (password excluded).

        Raises:
            NotFoundError: Token is valid but the account has been deleted
        """
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(resource="User", resource_id=user_id)
        return UserResponse.model_validate(user)
