"""
Post ownership flow — create / list / get / update / delete.

Reads join the author's public fields from the ``UserDirectory``;
mutations are restricted to the post's author.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, Optional

from core.errors import Forbidden, NotFound, Unauthorized
from database.models import Post, User
from database.repositories import PostStore, UserDirectory
from utils.schemas import AuthorSummary, PostOut

logger = logging.getLogger(__name__)

_POST_NOT_FOUND = "Post not found"


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; every stored timestamp is UTC.
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_post_out(post: Post, author: Optional[User]) -> PostOut:
    return PostOut(
        id=post.id,
        title=post.title,
        content=post.content,
        author=AuthorSummary.model_validate(author) if author is not None else None,
        created_at=_as_utc(post.created_at),
        updated_at=_as_utc(post.updated_at),
    )


def is_owner(post: Post, requester_id: str | uuid.UUID) -> bool:
    """Compare the stored author with the requester as plain strings."""
    return str(post.author_id) == str(requester_id)


async def _load_owned_post(
    posts: PostStore,
    post_id: str,
    requester_id: str,
    action: str,
) -> Post:
    post = await posts.find_by_id(post_id)
    if post is None:
        raise NotFound(_POST_NOT_FOUND)
    if not is_owner(post, requester_id):
        logger.warning(
            "User %s tried to %s post %s owned by %s",
            requester_id, action, post.id, post.author_id,
        )
        raise Forbidden()
    return post


async def create_post(
    posts: PostStore,
    directory: UserDirectory,
    author_id: str,
    title: str,
    content: str,
) -> PostOut:
    """Create a post; the token must name an existing user."""
    author = await directory.find_by_id(author_id)
    if author is None:
        logger.warning("Token names unknown user %s", author_id)
        raise Unauthorized("Token is not valid")

    post = await posts.insert(Post(title=title, content=content, author_id=author.id))
    logger.info("User %s created post %s", author.id, post.id)
    return to_post_out(post, author)


async def iter_posts(
    posts: PostStore,
    directory: UserDirectory,
    author_id: Optional[str] = None,
) -> AsyncIterator[PostOut]:
    """
    Yield posts newest first with their author joined.

    Each author is looked up once per listing.
    """
    authors: Dict[uuid.UUID, Optional[User]] = {}

    if author_id is not None:
        source = await posts.find_by_author(author_id)

        async def _rows() -> AsyncIterator[Post]:
            for row in source:
                yield row

        rows = _rows()
    else:
        rows = posts.find_all()

    async for post in rows:
        if post.author_id not in authors:
            authors[post.author_id] = await directory.find_by_id(post.author_id)
        yield to_post_out(post, authors[post.author_id])


async def get_post(
    posts: PostStore,
    directory: UserDirectory,
    post_id: str,
) -> PostOut:
    post = await posts.find_by_id(post_id)
    if post is None:
        raise NotFound(_POST_NOT_FOUND)
    return to_post_out(post, await directory.find_by_id(post.author_id))


async def update_post(
    posts: PostStore,
    directory: UserDirectory,
    post_id: str,
    requester_id: str,
    fields: Dict[str, Any],
) -> PostOut:
    """Apply the supplied title/content; only the author may do this."""
    post = await _load_owned_post(posts, post_id, requester_id, "update")
    post = await posts.update(post, fields)
    logger.info("User %s updated post %s", requester_id, post.id)
    return to_post_out(post, await directory.find_by_id(post.author_id))


async def delete_post(
    posts: PostStore,
    post_id: str,
    requester_id: str,
) -> None:
    post = await _load_owned_post(posts, post_id, requester_id, "delete")
    await posts.delete(post)
    logger.info("User %s deleted post %s", requester_id, post.id)
