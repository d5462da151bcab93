# src/ideaboard/api/v1/endpoints/auth.py
"""Authentication endpoints for the Ideaboard API."""

from __future__ import annotations

from fastapi import APIRouter, status

from ideaboard.api.v1.dependencies import CurrentUserDep, SessionDep
from ideaboard.schemas.common import MessageResponse
from ideaboard.schemas.user import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserMutationResponse,
    UserPrivate,
    VerifyResponse,
)
from ideaboard.services import users as user_service

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: SessionDep) -> AuthResponse:
    """Create an account and return a bearer token for it."""
    user = user_service.register_user(db, payload)
    return AuthResponse(
        message="User registered successfully",
        token=user_service.issue_token(user),
        user=UserPrivate.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, db: SessionDep) -> AuthResponse:
    """Exchange email and password for a bearer token."""
    user = user_service.authenticate(db, payload.email, payload.password)
    return AuthResponse(
        message="Login successful",
        token=user_service.issue_token(user),
        user=UserPrivate.model_validate(user),
    )


@router.get("/profile", response_model=UserPrivate)
async def get_profile(current_user: CurrentUserDep) -> UserPrivate:
    return UserPrivate.model_validate(current_user)


@router.put("/profile", response_model=UserMutationResponse)
async def update_profile(
    payload: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserMutationResponse:
    """Update the caller's handle, bio, avatar URL or social links."""
    user = user_service.update_own_profile(db, current_user, payload)
    return UserMutationResponse(
        message="Profile updated successfully",
        user=UserPrivate.model_validate(user),
    )


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    payload: ChangePasswordRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    user_service.change_password(
        db, current_user, payload.current_password, payload.new_password
    )
    return MessageResponse(message="Password changed successfully")


@router.get("/verify", response_model=VerifyResponse)
async def verify_token(current_user: CurrentUserDep) -> VerifyResponse:
    """Confirm the bearer token is valid (used by the frontend on load)."""
    return VerifyResponse(valid=True, user=UserPrivate.model_validate(current_user))
