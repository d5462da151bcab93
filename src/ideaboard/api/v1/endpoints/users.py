# src/ideaboard/api/v1/endpoints/users.py
"""User profile, administration and dashboard endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from ideaboard.api.v1.dependencies import AdminUserDep, CurrentUserDep, SessionDep
from ideaboard.core.settings import settings
from ideaboard.schemas.common import MessageResponse, UserPagination
from ideaboard.schemas.stats import UserStats
from ideaboard.schemas.user import (
    UserListResponse,
    UserMutationResponse,
    UserPrivate,
    UserPublic,
)
from ideaboard.services import stats as stats_service
from ideaboard.services import users as user_service
from ideaboard.services.avatars import AvatarStorage, get_avatar_storage

router = APIRouter(prefix="/users", tags=["users"])

AvatarStorageDep = Annotated[AvatarStorage, Depends(get_avatar_storage)]


@router.get("/", response_model=UserListResponse)
async def list_users(
    db: SessionDep,
    _admin: AdminUserDep,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    search: str = Query("", description="Match against username or email"),
) -> UserListResponse:
    """Admin-only listing of all accounts, newest first."""
    users, total = user_service.list_users(db, search=search, page=page, limit=limit)
    return UserListResponse(
        users=[UserPrivate.model_validate(u) for u in users],
        pagination=UserPagination.build(page=page, limit=limit, total=total, total_users=total),
    )


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(user_id: int, db: SessionDep) -> UserPublic:
    """Public profile of an active user."""
    return UserPublic.model_validate(user_service.get_active_user(db, user_id))


@router.get("/{user_id}/stats", response_model=UserStats)
async def get_user_stats(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserStats:
    """Dashboard totals for a user (self or admin only)."""
    return stats_service.user_stats(db, current_user, user_id)


@router.put("/{user_id}", response_model=UserMutationResponse)
async def update_user(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: AvatarStorageDep,
    username: str | None = Form(None),
    email: str | None = Form(None),
    bio: str | None = Form(None),
    description: str | None = Form(None),
    social_links: str | None = Form(None, alias="socialLinks"),
    role: str | None = Form(None),
    is_active: bool | None = Form(None, alias="isActive"),
    remove_avatar: bool = Form(False, alias="removeAvatar"),
    avatar: UploadFile | None = File(None),
) -> UserMutationResponse:
    """Multipart profile update with an optional avatar image.

    Owners may edit their own profile; admins may edit anyone and are the only
    callers allowed to change ``role`` or ``isActive``.
    """
    changes = user_service.UserUpdate(
        username=username,
        email=email,
        bio=bio,
        description=description,
        social_links=social_links,
        role=role,
        is_active=is_active,
        remove_avatar=remove_avatar,
        avatar=avatar if avatar is not None and avatar.filename else None,
    )
    user = user_service.update_user(db, current_user, user_id, changes, storage)
    return UserMutationResponse(
        message="User updated successfully",
        user=UserPrivate.model_validate(user),
    )


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: int, _admin: AdminUserDep, db: SessionDep) -> MessageResponse:
    """Deactivate a user and soft-delete all of their posts (admin only)."""
    user_service.deactivate_user(db, user_id)
    return MessageResponse(message="User deactivated successfully")
