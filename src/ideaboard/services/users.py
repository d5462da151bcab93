"""Account registration, authentication and profile management."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from email_validator import EmailNotValidError, validate_email
from fastapi import UploadFile
from sqlalchemy.orm import Session

from ideaboard.core.errors import (
    AuthenticationFailed,
    Conflict,
    NotFound,
    PermissionDenied,
    ValidationFailed,
)
from ideaboard.core.security import create_access_token, hash_password, verify_password
from ideaboard.db.time import utcnow
from ideaboard.models import USER_ROLES, User
from ideaboard.repositories import PostRepository, UserRepository
from ideaboard.schemas.user import (
    ProfileUpdateRequest,
    RegisterRequest,
    SocialLinks,
    validate_username,
)
from ideaboard.services.avatars import AvatarStorage

logger = logging.getLogger(__name__)

__all__ = [
    "UserUpdate",
    "authenticate",
    "change_password",
    "deactivate_user",
    "get_active_user",
    "issue_token",
    "list_users",
    "register_user",
    "update_own_profile",
    "update_user",
]


def issue_token(user: User) -> str:
    """Return a bearer token carrying the user's id, handle and avatar."""
    return create_access_token(user.id, username=user.username, avatar=user.avatar)


def _ensure_username_free(repo: UserRepository, username: str, current: User | None = None) -> None:
    existing = repo.get_by_username(username)
    if existing is not None and existing is not current:
        raise Conflict("Username already taken")


def _ensure_email_free(repo: UserRepository, email: str, current: User | None = None) -> None:
    existing = repo.get_by_email(email)
    if existing is not None and existing is not current:
        raise Conflict("Email already registered")


def register_user(db: Session, data: RegisterRequest) -> User:
    """Create an account; email is checked before the handle."""
    repo = UserRepository(db)
    email = data.email.lower().strip()
    _ensure_email_free(repo, email)
    _ensure_username_free(repo, data.username)

    user = repo.add(
        User(
            username=data.username.strip(),
            email=email,
            password_hash=hash_password(data.password),
            social_links={},
            last_login=utcnow(),
        )
    )
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the account for valid credentials and stamp its last login."""
    user = UserRepository(db).get_by_email(email.strip())
    if user is None:
        raise AuthenticationFailed("Invalid email or password")
    if not user.is_active:
        raise AuthenticationFailed("Account is deactivated")
    if not verify_password(password, user.password_hash):
        raise AuthenticationFailed("Invalid email or password")

    user.last_login = utcnow()
    db.commit()
    db.refresh(user)
    return user


def get_active_user(db: Session, user_id: int) -> User:
    user = UserRepository(db).get_by_id(user_id)
    if user is None or not user.is_active:
        raise NotFound("User not found")
    return user


def update_own_profile(db: Session, user: User, data: ProfileUpdateRequest) -> User:
    """Apply a JSON profile update by the account owner."""
    repo = UserRepository(db)
    if data.username is not None and data.username != user.username:
        _ensure_username_free(repo, data.username, current=user)
        user.username = data.username
    if data.bio is not None:
        user.bio = data.bio.strip()
    if data.avatar is not None:
        user.avatar = data.avatar or None
    if data.social_links is not None:
        user.social_links = data.social_links.model_dump()

    db.commit()
    db.refresh(user)
    return user


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.password_hash):
        raise ValidationFailed("Current password is incorrect")
    user.password_hash = hash_password(new_password)
    db.commit()
    logger.info("Password changed for user %s", user.id)


@dataclass
class UserUpdate:
    """Fields accepted by the multipart profile update; ``None`` means unchanged."""

    username: str | None = None
    email: str | None = None
    bio: str | None = None
    description: str | None = None
    social_links: str | None = None
    role: str | None = None
    is_active: bool | None = None
    remove_avatar: bool = False
    avatar: UploadFile | None = None


def _parse_social_links(raw: str) -> dict[str, Any]:
    try:
        return SocialLinks.model_validate_json(raw).model_dump()
    except ValueError as err:
        raise ValidationFailed("socialLinks must be a JSON object of valid links") from err


def update_user(
    db: Session,
    actor: User,
    user_id: int,
    changes: UserUpdate,
    storage: AvatarStorage,
) -> User:
    """Update a profile as its owner or as an admin.

    Only admins may change ``role`` or ``is_active``; deactivation cascades
    to the user's posts exactly like :func:`deactivate_user`.
    """
    if actor.id != user_id and not actor.is_admin:
        raise PermissionDenied("Not authorized to update this profile")

    repo = UserRepository(db)
    user = repo.get_by_id(user_id)
    if user is None:
        raise NotFound("User not found")

    if not actor.is_admin and (changes.role is not None or changes.is_active is not None):
        raise PermissionDenied("Not authorized to change role or status")

    if changes.username and changes.username != user.username:
        try:
            username = validate_username(changes.username)
        except ValueError as err:
            raise ValidationFailed(str(err)) from err
        _ensure_username_free(repo, username, current=user)
        user.username = username

    if changes.email and changes.email.lower().strip() != user.email:
        try:
            validated = validate_email(changes.email.strip(), check_deliverability=False)
        except EmailNotValidError as err:
            raise ValidationFailed("Please provide a valid email") from err
        email = validated.normalized.lower()
        _ensure_email_free(repo, email, current=user)
        user.email = email

    if changes.bio is not None:
        bio = changes.bio.strip()
        if len(bio) > 500:
            raise ValidationFailed("Bio must be at most 500 characters")
        user.bio = bio
    if changes.description is not None:
        description = changes.description.strip()
        if len(description) > 2000:
            raise ValidationFailed("Description must be at most 2000 characters")
        user.description = description
    if changes.social_links:
        user.social_links = _parse_social_links(changes.social_links)

    if changes.role is not None:
        if changes.role not in USER_ROLES:
            raise ValidationFailed("Role must be user, moderator, or admin")
        user.role = changes.role

    old_avatar = user.avatar
    new_avatar = None
    if changes.avatar is not None:
        new_avatar = user.avatar = storage.save(changes.avatar, user.id)
    elif changes.remove_avatar:
        user.avatar = None

    if changes.is_active is False and user.is_active:
        _deactivate(db, user)
    elif changes.is_active is True:
        user.is_active = True

    try:
        db.commit()
    except Exception:
        db.rollback()
        storage.remove(new_avatar)
        raise
    # Files only change once the row points at the right avatar.
    if old_avatar and old_avatar != user.avatar:
        storage.remove(old_avatar)
    db.refresh(user)
    return user


def _deactivate(db: Session, user: User) -> int:
    user.is_active = False
    hidden = PostRepository(db).deactivate_by_author(user.id)
    logger.info("Deactivated user %s and %d of their posts", user.id, hidden)
    return hidden


def deactivate_user(db: Session, user_id: int) -> User:
    """Soft-delete an account and every post it authored."""
    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise NotFound("User not found")
    _deactivate(db, user)
    db.commit()
    db.refresh(user)
    return user


def list_users(db: Session, *, search: str, page: int, limit: int) -> tuple[list[User], int]:
    return UserRepository(db).list(search=search.strip(), page=page, limit=limit)
