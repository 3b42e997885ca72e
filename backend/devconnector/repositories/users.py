"""
User persistence: lookups by id and email, creation and removal.
"""

from typing import Optional

from sqlalchemy import select

from devconnector.models.user import User
from devconnector.repositories.base import IdLike, Repository, coerce_uuid, translate_errors


class UserRepository(Repository):

    async def find_by_id(self, user_id: IdLike) -> Optional[User]:
        uid = coerce_uuid(user_id)
        if uid is None:
            return None
        with translate_errors("find user by id"):
            return await self.session.get(User, uid)

    async def find_by_email(self, email: str) -> Optional[User]:
        with translate_errors("find user by email"):
            result = await self.session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    async def add(self, user: User) -> User:
        self.session.add(user)
        await self.save()
        return user

    async def delete(self, user: User) -> None:
        with translate_errors("delete user"):
            await self.session.delete(user)
            await self.session.flush()
