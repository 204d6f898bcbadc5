"""
Auth flow — registration, login and profile maintenance.

Route handlers in ``auth.routes`` validate input and delegate here; the
functions below only see a ``UserDirectory`` and, for login, a
``TokenService``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

from auth.jwt import TokenService
from auth.password import DEFAULT_ROUNDS, hash_password, verify_password
from core.errors import AlreadyExists, InvalidCredentials, NotFound
from database.models import User
from database.repositories import UserDirectory
from utils.schemas import LoginResponse, RegisterRequest, UserSummary

logger = logging.getLogger(__name__)

_USER_NOT_FOUND = "User not found"


async def register(
    directory: UserDirectory,
    req: RegisterRequest,
    *,
    bcrypt_rounds: int = DEFAULT_ROUNDS,
) -> UserSummary:
    """Create a user; fails with ``AlreadyExists`` when the email is taken."""
    if await directory.find_by_email(req.email) is not None:
        raise AlreadyExists()

    # bcrypt is CPU-bound; keep the event loop free for other requests.
    password_hash = await asyncio.to_thread(hash_password, req.password, bcrypt_rounds)

    user = await directory.insert(
        User(
            username=req.username,
            email=req.email,
            password_hash=password_hash,
            date_of_birth=req.date_of_birth,
            gender=req.gender.value,
            phone_number=req.phone_number,
        )
    )
    logger.info("Registered user %s (%s)", user.username, user.id)
    return UserSummary.model_validate(user)


async def login(
    directory: UserDirectory,
    tokens: TokenService,
    email: str,
    password: str,
) -> LoginResponse:
    """Check credentials and issue a bearer token."""
    user = await directory.find_by_email(email)

    if user is None or not await asyncio.to_thread(
        verify_password, password, user.password_hash
    ):
        logger.info("Failed login attempt")
        raise InvalidCredentials()

    token = tokens.issue(str(user.id))
    logger.info("Login: %s (%s)", user.username, user.id)

    return LoginResponse(token=token, user=UserSummary.model_validate(user))


async def get_profile(directory: UserDirectory, user_id: str) -> UserSummary:
    user = await directory.find_by_id(user_id)
    if user is None:
        raise NotFound(_USER_NOT_FOUND)
    return UserSummary.model_validate(user)


async def update_profile(
    directory: UserDirectory,
    user_id: str,
    fields: Dict[str, Any],
) -> UserSummary:
    """
    Apply the supplied profile fields to the authenticated user.

    ``fields`` holds only what the client sent (snake_case keys); absent
    fields are left untouched.
    """
    user = await directory.find_by_id(user_id)
    if user is None:
        raise NotFound(_USER_NOT_FOUND)

    new_email = fields.get("email")
    if new_email and new_email != user.email:
        if await directory.find_by_email(new_email) is not None:
            raise AlreadyExists("Email already in use")

    if "gender" in fields:
        fields = {**fields, "gender": getattr(fields["gender"], "value", fields["gender"])}

    user = await directory.update(user, fields)
    logger.info("Updated profile of %s (fields: %s)", user.id, ", ".join(sorted(fields)))
    return UserSummary.model_validate(user)
