"""
DevConnector Backend — Posts Route Handlers
=============================================

What:  The feed API: posts, likes and comments. Every route requires a token.
How:   The Auth Gate (CurrentUser) runs first, then body validation, then the
       PostService call. Post and comment ids are taken as plain strings so a
       malformed id produces 404 rather than a validation error.
"""

from typing import List

from fastapi import APIRouter

from devconnector.dependencies import CurrentUser, Posts
from devconnector.schemas.common import ErrorResponse, MessageResponse
from devconnector.schemas.post import (
    CommentCreate,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
)

router = APIRouter(
    prefix="/api/posts",
    tags=["Posts"],
    responses={401: {"description": "Missing, invalid or expired token", "model": ErrorResponse}},
)

_NOT_FOUND = {404: {"description": "Post not found", "model": ErrorResponse}}


@router.post(
    "",
    status_code=201,
    response_model=PostResponse,
    responses={400: {"description": "Text is required", "model": ErrorResponse}},
    summary="Create a post",
)
async def create_post(identity: CurrentUser, data: PostCreate, posts: Posts) -> PostResponse:
    return await posts.create_post(identity.user_id, data)


@router.get("", response_model=List[PostResponse], summary="Get all posts, newest first")
async def list_posts(identity: CurrentUser, posts: Posts) -> List[PostResponse]:
    return await posts.list_posts()


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    responses=_NOT_FOUND,
    summary="Get post by ID",
)
async def get_post(post_id: str, identity: CurrentUser, posts: Posts) -> PostResponse:
    return await posts.get_post(post_id)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Delete a post (author only)",
)
async def delete_post(post_id: str, identity: CurrentUser, posts: Posts) -> MessageResponse:
    return await posts.delete_post(identity.user_id, post_id)


@router.put(
    "/like/{post_id}",
    response_model=List[LikeResponse],
    responses={**_NOT_FOUND, 400: {"description": "Post already liked", "model": ErrorResponse}},
    summary="Like a post",
)
async def like_post(post_id: str, identity: CurrentUser, posts: Posts) -> List[LikeResponse]:
    return await posts.like_post(identity.user_id, post_id)


@router.put(
    "/unlike/{post_id}",
    response_model=List[LikeResponse],
    responses={**_NOT_FOUND, 400: {"description": "Post not liked yet", "model": ErrorResponse}},
    summary="Unlike a post",
)
async def unlike_post(post_id: str, identity: CurrentUser, posts: Posts) -> List[LikeResponse]:
    return await posts.unlike_post(identity.user_id, post_id)


@router.post(
    "/comment/{post_id}",
    response_model=List[CommentResponse],
    responses={**_NOT_FOUND, 400: {"description": "Text is required", "model": ErrorResponse}},
    summary="Comment on a post",
)
async def add_comment(
    post_id: str,
    identity: CurrentUser,
    data: CommentCreate,
    posts: Posts,
) -> List[CommentResponse]:
    return await posts.add_comment(identity.user_id, post_id, data)


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Post or comment not found", "model": ErrorResponse}},
    summary="Delete a comment (comment author only)",
)
async def delete_comment(
    post_id: str,
    comment_id: str,
    identity: CurrentUser,
    posts: Posts,
) -> MessageResponse:
    return await posts.delete_comment(identity.user_id, post_id, comment_id)
