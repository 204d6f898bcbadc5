"""
FastAPI dependencies for authentication.

Provides the store and token-service dependencies and
``get_current_user_id``, the bearer-token gate used by every protected
route.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import InvalidToken, TokenService
from core.errors import Unauthorized
from database.repositories import PostStore, UserDirectory
from database.session import get_db_session

# auto_error=False: a missing header must answer 401 with our own body, not 403.
_bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def get_user_directory(
    session: AsyncSession = Depends(get_db_session),
) -> UserDirectory:
    return UserDirectory(session)


async def get_post_store(
    session: AsyncSession = Depends(get_db_session),
) -> PostStore:
    return PostStore(session)


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """
    Extract and verify the Bearer token, returning the authenticated
    ``user_id`` (UUID string).  The id is also attached to
    ``request.state.user_id``.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized()

    try:
        user_id = tokens.verify(credentials.credentials)
    except InvalidToken:
        raise Unauthorized("Token is not valid")

    request.state.user_id = user_id
    return user_id
