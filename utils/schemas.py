"""
Pydantic request / response contracts for the HTTP API.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from database.models import Gender

_PHONE_PATTERN = r"^[0-9]{10,15}$"


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# ═══════════════════════════════════════════════════════════════════════════════
# Auth — requests
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(_ApiModel):
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=6)
    date_of_birth: date = Field(..., alias="dateOfBirth")
    gender: Gender
    phone_number: str = Field(..., alias="phoneNumber", pattern=_PHONE_PATTERN)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        # bcrypt only looks at the first 72 bytes and newer releases reject longer input.
        if len(value.encode()) > 72:
            raise ValueError("password must be at most 72 bytes")
        return value


class LoginRequest(_ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class UpdateProfileRequest(_ApiModel):
    """Every field optional; only the ones sent are applied."""

    username: Optional[str] = Field(None, min_length=3, max_length=30)
    email: Optional[EmailStr] = None
    date_of_birth: Optional[date] = Field(None, alias="dateOfBirth")
    gender: Optional[Gender] = None
    phone_number: Optional[str] = Field(None, alias="phoneNumber", pattern=_PHONE_PATTERN)


# ═══════════════════════════════════════════════════════════════════════════════
# Auth — responses
# ═══════════════════════════════════════════════════════════════════════════════


class UserSummary(_ApiModel):
    id: uuid.UUID
    username: str
    email: str
    date_of_birth: date = Field(..., alias="dateOfBirth")
    gender: Gender
    phone_number: str = Field(..., alias="phoneNumber")


class LoginResponse(_ApiModel):
    token: str
    user: UserSummary


class MessageResponse(_ApiModel):
    message: str


class ProfileUpdateResponse(_ApiModel):
    message: str
    user: UserSummary


# ═══════════════════════════════════════════════════════════════════════════════
# Posts
# ═══════════════════════════════════════════════════════════════════════════════


class PostCreateRequest(_ApiModel):
    title: str = Field(..., min_length=3, max_length=100)
    content: str = Field(..., min_length=10)


class PostUpdateRequest(_ApiModel):
    title: Optional[str] = Field(None, min_length=3, max_length=100)
    content: Optional[str] = Field(None, min_length=10)


class AuthorSummary(_ApiModel):
    """Public author fields joined into a post; never the password hash."""

    id: uuid.UUID
    username: str
    email: str


class PostOut(_ApiModel):
    id: uuid.UUID
    title: str
    content: str
    author: Optional[AuthorSummary] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
