"""
Schemas for posts, likes and comments.

Response models read ORM attributes (`user_id`, `created_at`) and expose them
under the names the frontend uses (`user`, `date`).
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from devconnector.schemas.common import require_text


class PostCreate(BaseModel):
    """Body of POST /api/posts."""
    text: str = Field(default="", validate_default=True)

    @field_validator("text", mode="before")
    @classmethod
    def validate_text(cls, v):
        return require_text(v, "Text is required")


class CommentCreate(BaseModel):
    """Body of POST /api/posts/comment/{post_id}."""
    text: str = Field(default="", validate_default=True)

    @field_validator("text", mode="before")
    @classmethod
    def validate_text(cls, v):
        return require_text(v, "Text is required")


class LikeResponse(BaseModel):
    id: uuid.UUID
    user: uuid.UUID = Field(validation_alias="user_id")

    model_config = {"from_attributes": True, "populate_by_name": True}


class CommentResponse(BaseModel):
    id: uuid.UUID
    user: uuid.UUID = Field(validation_alias="user_id")
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: datetime = Field(validation_alias="created_at")

    model_config = {"from_attributes": True, "populate_by_name": True}


class PostResponse(BaseModel):
    """
    What:  Full post with its likes and comments, newest first.
    Who:   Returned by every /api/posts endpoint that yields a post.
    """
    id: uuid.UUID
    user: uuid.UUID = Field(validation_alias="user_id", description="Author's user id")
    text: str
    name: Optional[str] = Field(default=None, description="Author name at creation time")
    avatar: Optional[str] = Field(default=None, description="Author avatar at creation time")
    likes: List[LikeResponse] = Field(default_factory=list)
    comments: List[CommentResponse] = Field(default_factory=list)
    date: datetime = Field(validation_alias="created_at")

    model_config = {"from_attributes": True, "populate_by_name": True}
