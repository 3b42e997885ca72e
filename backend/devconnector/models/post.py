"""
DevConnector Backend — Post, Like and Comment SQLAlchemy Models
=================================================================

What:  ORM models for the feed: `posts`, `post_likes`, `post_comments`.
How:   Likes and comments are child rows owned by their post
       (cascade="all, delete-orphan"): removing one from `post.likes` or
       `post.comments` deletes the row on the next flush, and deleting the
       post deletes its children.
Who:   Used by PostRepository and PostService.

Ordering:
    Both collections are loaded newest-first (created_at DESC). New likes and
    comments are inserted at index 0 of the in-memory list, so the list a
    handler returns right after a mutation has the same order a later read
    produces.

Snapshot stamping:
    `name` and `avatar` on posts and comments are copied from the author at
    creation time. Later changes to the user do not rewrite old posts.

Relationships use lazy="selectin": async sessions cannot lazy-load on
attribute access, so children are fetched together with their post.
"""

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devconnector.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Author reference; ownership checks compare against this column
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    likes: Mapped[List["Like"]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        order_by=lambda: Like.created_at.desc(),
        lazy="selectin",
    )

    comments: Mapped[List["Comment"]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        order_by=lambda: Comment.created_at.desc(),
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_posts_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id={self.user_id})>"


class Like(Base):
    """
    One user's like on one post.

    There is deliberately no unique constraint on (post_id, user_id); the
    "one like per user" rule is a membership pre-check in PostService.
    """

    __tablename__ = "post_likes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    post: Mapped[Post] = relationship(back_populates="likes")


class Comment(Base):
    __tablename__ = "post_comments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    post: Mapped[Post] = relationship(back_populates="comments")
