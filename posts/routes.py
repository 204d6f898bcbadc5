"""
Post API routes.

Route prefix: /api/posts
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from auth.dependencies import get_current_user_id, get_post_store, get_user_directory
from database.repositories import PostStore, UserDirectory
from posts import service
from utils.schemas import MessageResponse, PostCreateRequest, PostOut, PostUpdateRequest

router = APIRouter(tags=["posts"])


@router.post("", response_model=PostOut, status_code=status.HTTP_201_CREATED)
async def create_post(
    req: PostCreateRequest,
    posts: PostStore = Depends(get_post_store),
    directory: UserDirectory = Depends(get_user_directory),
    user_id: str = Depends(get_current_user_id),
) -> PostOut:
    """Create a post authored by the caller."""
    return await service.create_post(posts, directory, user_id, req.title, req.content)


@router.get("", response_model=List[PostOut])
async def list_posts(
    author: Optional[str] = Query(None, description="Only posts by this user id"),
    posts: PostStore = Depends(get_post_store),
    directory: UserDirectory = Depends(get_user_directory),
) -> List[PostOut]:
    """List all posts, newest first."""
    return [post async for post in service.iter_posts(posts, directory, author)]


@router.get("/{post_id}", response_model=PostOut)
async def get_post(
    post_id: str,
    posts: PostStore = Depends(get_post_store),
    directory: UserDirectory = Depends(get_user_directory),
) -> PostOut:
    return await service.get_post(posts, directory, post_id)


@router.put("/{post_id}", response_model=PostOut)
async def update_post(
    post_id: str,
    req: PostUpdateRequest,
    posts: PostStore = Depends(get_post_store),
    directory: UserDirectory = Depends(get_user_directory),
    user_id: str = Depends(get_current_user_id),
) -> PostOut:
    """Update a post (only the author can)."""
    fields = req.model_dump(exclude_unset=True, exclude_none=True)
    return await service.update_post(posts, directory, post_id, user_id, fields)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    posts: PostStore = Depends(get_post_store),
    user_id: str = Depends(get_current_user_id),
) -> MessageResponse:
    """Delete a post (only the author can)."""
    await service.delete_post(posts, post_id, user_id)
    return MessageResponse(message="Post deleted")
