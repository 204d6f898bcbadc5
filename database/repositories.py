"""
Store access for users and posts.

``UserDirectory`` and ``PostStore`` wrap one ``AsyncSession`` each and
expose only the lookups and writes the flows need.  Every write commits
immediately; no operation spans more than one record.
"""

from __future__ import annotations

import uuid
from typing import Any, AsyncIterator, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import AlreadyExists
from database.models import Post, User, utc_now


def to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    """Parse an id; ``None`` when it is not a valid UUID."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class UserDirectory:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self._session.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: str | uuid.UUID) -> Optional[User]:
        uid = to_uuid(user_id)
        if uid is None:
            return None
        return await self._session.get(User, uid)

    async def insert(self, user: User) -> User:
        """Persist a new user; the unique email index backs ``AlreadyExists``."""
        self._session.add(user)
        await self._commit_unique_email(AlreadyExists())
        return user

    async def update(self, user: User, fields: Dict[str, Any]) -> User:
        for name, value in fields.items():
            setattr(user, name, value)
        user.updated_at = utc_now()
        await self._commit_unique_email(AlreadyExists("Email already in use"))
        return user

    async def _commit_unique_email(self, error: AlreadyExists) -> None:
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise error from exc


class PostStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, post_id: str | uuid.UUID) -> Optional[Post]:
        pid = to_uuid(post_id)
        if pid is None:
            return None
        return await self._session.get(Post, pid)

    async def find_all(self) -> AsyncIterator[Post]:
        result = await self._session.execute(
            select(Post).order_by(Post.created_at.desc())
        )
        for post in result.scalars():
            yield post

    async def find_by_author(self, author_id: str | uuid.UUID) -> List[Post]:
        uid = to_uuid(author_id)
        if uid is None:
            return []
        result = await self._session.execute(
            select(Post)
            .where(Post.author_id == uid)
            .order_by(Post.created_at.desc())
        )
        return list(result.scalars())

    async def insert(self, post: Post) -> Post:
        self._session.add(post)
        await self._session.commit()
        return post

    async def update(self, post: Post, fields: Dict[str, Any]) -> Post:
        for name in ("title", "content"):
            if name in fields:
                setattr(post, name, fields[name])
        post.updated_at = utc_now()
        await self._session.commit()
        return post

    async def delete(self, post: Post) -> None:
        await self._session.delete(post)
        await self._session.commit()
