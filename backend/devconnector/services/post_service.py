"""
DevConnector Backend — Post Service
=====================================

What:  Business rules for the feed: posts, likes and comments.
How:   Loads posts through PostRepository, applies ownership and membership
       checks, mutates the ORM objects and flushes through the repository.
Who:   Called by routes/posts.py with the identity resolved by the Auth Gate.

Rules:
    - Any authenticated user may read posts, like/unlike and comment.
    - Only the author may delete a post; only a comment's author may delete it.
      A mismatch raises UnauthorizedError before anything is changed.
    - A user likes a post at most once (membership pre-check).
    - Likes and comments are prepended, so lists are newest first.
    - Unknown and malformed ids both raise NotFoundError.

Concurrency:
    Like/unlike and comment changes are read-modify-write on a loaded post
    with no row lock. Two concurrent likes by the same user can both pass the
    membership check and store two likes; this is a known, accepted race.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from devconnector.exceptions import InvalidActionError, NotFoundError, UnauthorizedError
from devconnector.models.post import Comment, Like, Post
from devconnector.repositories.base import coerce_uuid
from devconnector.repositories.posts import PostRepository
from devconnector.repositories.users import UserRepository
from devconnector.schemas.common import MessageResponse
from devconnector.schemas.post import (
    CommentCreate,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PostService:

    def __init__(self, posts: PostRepository, users: UserRepository):
        self.posts = posts
        self.users = users

    # ── Posts ─────────────────────────────────────────────────────────────

    async def create_post(self, actor_id: uuid.UUID, data: PostCreate) -> PostResponse:
        """Create a post stamped with the author's current name and avatar."""
        author = await self.users.find_by_id(actor_id)
        if author is None:
            raise NotFoundError(resource="User", resource_id=str(actor_id))

        post = Post(
            id=uuid.uuid4(),
            user_id=actor_id,
            text=data.text,
            name=author.name,
            avatar=author.avatar,
            created_at=_utcnow(),
            likes=[],
            comments=[],
        )
        await self.posts.add(post)
        logger.info("User %s created post %s", actor_id, post.id)
        return PostResponse.model_validate(post)

    async def list_posts(self) -> List[PostResponse]:
        posts = await self.posts.list_newest_first()
        return [PostResponse.model_validate(post) for post in posts]

    async def get_post(self, post_id: str) -> PostResponse:
        post = await self._get_post_or_404(post_id)
        return PostResponse.model_validate(post)

    async def delete_post(self, actor_id: uuid.UUID, post_id: str) -> MessageResponse:
        post = await self._get_post_or_404(post_id)
        self._ensure_owner(actor_id, post.user_id, "post", post.id)

        await self.posts.delete(post)
        logger.info("User %s deleted post %s", actor_id, post.id)
        return MessageResponse(msg="Post removed.")

    # ── Likes ─────────────────────────────────────────────────────────────

    async def like_post(self, actor_id: uuid.UUID, post_id: str) -> List[LikeResponse]:
        post = await self._get_post_or_404(post_id)
        if self._find_like(post, actor_id) is not None:
            raise InvalidActionError(message="Post already liked.")

        post.likes.insert(0, Like(id=uuid.uuid4(), user_id=actor_id, created_at=_utcnow()))
        await self.posts.save()
        return [LikeResponse.model_validate(like) for like in post.likes]

    async def unlike_post(self, actor_id: uuid.UUID, post_id: str) -> List[LikeResponse]:
        post = await self._get_post_or_404(post_id)
        like = self._find_like(post, actor_id)
        if like is None:
            raise InvalidActionError(message="You haven't liked this post yet.")

        post.likes.remove(like)
        await self.posts.save()
        return [LikeResponse.model_validate(like) for like in post.likes]

    # ── Comments ──────────────────────────────────────────────────────────

    async def add_comment(
        self,
        actor_id: uuid.UUID,
        post_id: str,
        data: CommentCreate,
    ) -> List[CommentResponse]:
        author = await self.users.find_by_id(actor_id)
        if author is None:
            raise NotFoundError(resource="User", resource_id=str(actor_id))
        post = await self._get_post_or_404(post_id)

        comment = Comment(
            id=uuid.uuid4(),
            user_id=actor_id,
            text=data.text,
            name=author.name,
            avatar=author.avatar,
            created_at=_utcnow(),
        )
        post.comments.insert(0, comment)
        await self.posts.save()
        logger.info("User %s commented on post %s", actor_id, post.id)
        return [CommentResponse.model_validate(c) for c in post.comments]

    async def delete_comment(
        self,
        actor_id: uuid.UUID,
        post_id: str,
        comment_id: str,
    ) -> MessageResponse:
        """
        Remove exactly the comment named by `comment_id`.

        Raises:
            NotFoundError:     Post or comment missing
            UnauthorizedError: Actor did not write the comment
        """
        post = await self._get_post_or_404(post_id)

        cid = coerce_uuid(comment_id)
        comment = next((c for c in post.comments if c.id == cid), None) if cid else None
        if comment is None:
            raise NotFoundError(
                resource="Comment",
                resource_id=comment_id,
                message="Comment does not exist.",
            )

        self._ensure_owner(actor_id, comment.user_id, "comment", comment.id)

        post.comments.remove(comment)
        await self.posts.save()
        logger.info("User %s deleted comment %s on post %s", actor_id, comment.id, post.id)
        return MessageResponse(msg="Comment removed.")

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _get_post_or_404(self, post_id: str) -> Post:
        post = await self.posts.find_by_id(post_id)
        if post is None:
            raise NotFoundError(resource="Post", resource_id=str(post_id))
        return post

    @staticmethod
    def _find_like(post: Post, actor_id: uuid.UUID) -> Optional[Like]:
        return next((like for like in post.likes if like.user_id == actor_id), None)

    @staticmethod
    def _ensure_owner(
        actor_id: uuid.UUID,
        owner_id: uuid.UUID,
        resource: str,
        resource_id: uuid.UUID,
    ) -> None:
        if actor_id != owner_id:
            logger.warning(
                "User %s tried to modify %s %s owned by %s",
                actor_id, resource, resource_id, owner_id,
            )
            raise UnauthorizedError(
                context={"resource": resource, "resource_id": str(resource_id)},
            )
