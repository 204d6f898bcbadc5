"""
JWT token creation and verification.

Tokens are HS256 JWTs carrying ``{"id": user_id, "iat", "exp"}``.
The secret and lifetime come from the settings object the app is
built with (env var: ``JWT_SECRET``).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

_ALGORITHM = "HS256"


class InvalidToken(Exception):
    """Malformed, badly signed or expired token; the cause is not exposed."""


class TokenService:
    def __init__(self, secret: str, expiry_seconds: int = 3600) -> None:
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._expiry = timedelta(seconds=expiry_seconds)

    def issue(self, user_id: str, now: Optional[datetime] = None) -> str:
        """Create a signed token containing ``user_id`` and expiry."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "id": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self._expiry,
        }
        return jwt.encode(payload, self._secret, algorithm=_ALGORITHM)

    def verify(self, token: str) -> str:
        """
        Verify token and return ``user_id``.

        Raises ``InvalidToken`` on any failure.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[_ALGORITHM],
                options={"require": ["exp", "id"]},
            )
        except jwt.PyJWTError as exc:
            raise InvalidToken() from exc

        user_id = payload["id"]
        if not isinstance(user_id, str) or not user_id:
            raise InvalidToken()
        return user_id
