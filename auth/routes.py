"""
Auth API routes — register, login, profile.

Route prefix: /api/auth
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from auth import service
from auth.dependencies import get_current_user_id, get_token_service, get_user_directory
from auth.jwt import TokenService
from database.repositories import UserDirectory
from utils.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileUpdateResponse,
    RegisterRequest,
    UpdateProfileRequest,
    UserSummary,
)

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    request: Request,
    directory: UserDirectory = Depends(get_user_directory),
) -> MessageResponse:
    """Register a new user. No token is issued; clients log in afterwards."""
    await service.register(
        directory,
        req,
        bcrypt_rounds=request.app.state.settings.bcrypt_rounds,
    )
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    directory: UserDirectory = Depends(get_user_directory),
    tokens: TokenService = Depends(get_token_service),
) -> LoginResponse:
    """Login with email + password."""
    return await service.login(directory, tokens, req.email, req.password)


@router.get("/profile", response_model=UserSummary)
async def profile(
    directory: UserDirectory = Depends(get_user_directory),
    user_id: str = Depends(get_current_user_id),
) -> UserSummary:
    """Return the authenticated user's profile."""
    return await service.get_profile(directory, user_id)


@router.put("/update", response_model=ProfileUpdateResponse)
async def update_profile(
    req: UpdateProfileRequest,
    directory: UserDirectory = Depends(get_user_directory),
    user_id: str = Depends(get_current_user_id),
) -> ProfileUpdateResponse:
    """Update any subset of username, email, dateOfBirth, gender, phoneNumber."""
    fields = req.model_dump(exclude_unset=True, exclude_none=True)
    user = await service.update_profile(directory, user_id, fields)
    return ProfileUpdateResponse(message="Profile updated successfully", user=user)
