"""
Profile persistence.
"""

import uuid
from typing import List, Optional

from sqlalchemy import desc, select

from devconnector.models.profile import Profile
from devconnector.repositories.base import IdLike, Repository, coerce_uuid, translate_errors


class ProfileRepository(Repository):

    async def find_by_user_id(self, user_id: IdLike) -> Optional[Profile]:
        uid = coerce_uuid(user_id)
        if uid is None:
            return None
        with translate_errors("find profile by user"):
            result = await self.session.execute(select(Profile).where(Profile.user_id == uid))
            return result.scalar_one_or_none()

    async def list_all(self) -> List[Profile]:
        with translate_errors("list profiles"):
            result = await self.session.execute(select(Profile).order_by(desc(Profile.created_at)))
            return list(result.scalars().all())

    async def add(self, profile: Profile) -> Profile:
        self.session.add(profile)
        await self.save()
        return profile

    async def delete_for_user(self, user_id: uuid.UUID) -> None:
        profile = await self.find_by_user_id(user_id)
        if profile is None:
            return
        with translate_errors("delete profile"):
            await self.session.delete(profile)
            await self.session.flush()
