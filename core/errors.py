"""
Application error taxonomy.

Every business-rule failure is an ``AppError`` carrying the HTTP status it
maps to; ``api.middleware`` turns them into ``{"message": ...}`` bodies.
"""

from __future__ import annotations

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class AlreadyExists(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"


class InvalidCredentials(AppError):
    """Same message whether the email is unknown or the password is wrong."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid credentials"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "No token, authorization denied"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Not authorized"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class InternalError(AppError):
    pass


class HashingError(InternalError):
    pass
