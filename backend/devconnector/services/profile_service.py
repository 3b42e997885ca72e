"""
DevConnector Backend — Profile Service
========================================

What:  Create/update, read and delete developer profiles.
How:   One profile per user, addressed by the owner's user id. Writes are
       only ever made to the actor's own profile, so ownership is implied by
       the lookup key rather than checked after the fact.
Who:   Called by routes/profile.py.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List

from devconnector.exceptions import InvalidActionError, NotFoundError
from devconnector.models.profile import Profile
from devconnector.repositories.posts import PostRepository
from devconnector.repositories.profiles import ProfileRepository
from devconnector.repositories.users import UserRepository
from devconnector.schemas.common import MessageResponse
from devconnector.schemas.profile import ProfileResponse, ProfileUpsert

logger = logging.getLogger(__name__)

# Columns copied verbatim from the request body
_PROFILE_FIELDS = ("company", "website", "location", "status", "skills", "bio", "githubusername")


class ProfileService:

    def __init__(
        self,
        profiles: ProfileRepository,
        users: UserRepository,
        posts: PostRepository,
    ):
        self.profiles = profiles
        self.users = users
        self.posts = posts

    async def get_own_profile(self, actor_id: uuid.UUID) -> ProfileResponse:
        profile = await self.profiles.find_by_user_id(actor_id)
        if profile is None:
            raise InvalidActionError(message="There is no profile for this user.")
        return ProfileResponse.model_validate(profile)

    async def upsert_profile(self, actor_id: uuid.UUID, data: ProfileUpsert) -> ProfileResponse:
        """Create the actor's profile, or overwrite it if one exists."""
        profile = await self.profiles.find_by_user_id(actor_id)

        if profile is None:
            owner = await self.users.find_by_id(actor_id)
            if owner is None:
                raise NotFoundError(resource="User", resource_id=str(actor_id))
            profile = Profile(
                id=uuid.uuid4(),
                user_id=actor_id,
                user=owner,
                created_at=datetime.now(timezone.utc),
            )
            self._apply(profile, data)
            await self.profiles.add(profile)
            logger.info("User %s created profile %s", actor_id, profile.id)
        else:
            self._apply(profile, data)
            await self.profiles.save()
            logger.info("User %s updated profile %s", actor_id, profile.id)

        return ProfileResponse.model_validate(profile)

    async def list_profiles(self) -> List[ProfileResponse]:
        profiles = await self.profiles.list_all()
        return [ProfileResponse.model_validate(p) for p in profiles]

    async def get_profile_by_user(self, user_id: str) -> ProfileResponse:
        profile = await self.profiles.find_by_user_id(user_id)
        if profile is None:
            raise InvalidActionError(message="Profile not found.")
        return ProfileResponse.model_validate(profile)

    async def delete_account(self, actor_id: uuid.UUID) -> MessageResponse:
        """Remove the actor's posts, profile and user record."""
        for post in await self.posts.list_by_author(actor_id):
            await self.posts.delete(post)
        await self.profiles.delete_for_user(actor_id)

        user = await self.users.find_by_id(actor_id)
        if user is not None:
            await self.users.delete(user)

        logger.info("User %s deleted their account", actor_id)
        return MessageResponse(msg="User deleted.")

    @staticmethod
    def _apply(profile: Profile, data: ProfileUpsert) -> None:
        for field in _PROFILE_FIELDS:
            setattr(profile, field, getattr(data, field))
        profile.social = data.social_links()
