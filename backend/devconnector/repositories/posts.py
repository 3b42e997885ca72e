"""
Post persistence. Likes and comments travel with their post (selectin-loaded
relationships), so there is no separate like or comment repository.
"""

import uuid
from typing import List, Optional

from sqlalchemy import desc, select

from devconnector.models.post import Post
from devconnector.repositories.base import IdLike, Repository, coerce_uuid, translate_errors


class PostRepository(Repository):

    async def find_by_id(self, post_id: IdLike) -> Optional[Post]:
        pid = coerce_uuid(post_id)
        if pid is None:
            return None
        with translate_errors("find post by id"):
            return await self.session.get(Post, pid)

    async def list_newest_first(self) -> List[Post]:
        with translate_errors("list posts"):
            result = await self.session.execute(select(Post).order_by(desc(Post.created_at)))
            return list(result.scalars().all())

    async def list_by_author(self, user_id: uuid.UUID) -> List[Post]:
        with translate_errors("list posts by author"):
            result = await self.session.execute(select(Post).where(Post.user_id == user_id))
            return list(result.scalars().all())

    async def add(self, post: Post) -> Post:
        self.session.add(post)
        await self.save()
        return post

    async def delete(self, post: Post) -> None:
        # Children are removed through the delete-orphan cascade
        with translate_errors("delete post"):
            await self.session.delete(post)
            await self.session.flush()
