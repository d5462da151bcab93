"""User-related Pydantic schemas."""

import re
from datetime import datetime

from pydantic import EmailStr, Field, ValidationInfo, field_validator

from .common import CamelModel, UserPagination

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
SOCIAL_LINK_PATTERNS: dict[str, re.Pattern[str]] = {
    "website": re.compile(r"^https?://[^\s/$.?#].[^\s]*$"),
    "twitter": re.compile(r"^https?://(www\.)?twitter\.com/[a-zA-Z0-9_]+/?$"),
    "linkedin": re.compile(r"^https?://(www\.)?linkedin\.com/in/[a-zA-Z0-9_-]+/?$"),
    "github": re.compile(r"^https?://(www\.)?github\.com/[a-zA-Z0-9_-]+/?$"),
}
BCRYPT_MAX_BYTES = 72


def validate_username(value: str) -> str:
    """Check length and character set of a handle."""
    value = value.strip()
    if not 3 <= len(value) <= 30:
        raise ValueError("Username must be between 3 and 30 characters")
    if not USERNAME_PATTERN.match(value):
        raise ValueError("Username can only contain letters, numbers, and underscores")
    return value


def validate_new_password(value: str, label: str = "Password") -> str:
    if len(value) < 6:
        raise ValueError(f"{label} must be at least 6 characters long")
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"{label} must be at most {BCRYPT_MAX_BYTES} bytes long")
    return value


class SocialLinks(CamelModel):
    """Optional links to a user's presence elsewhere."""

    website: str | None = None
    twitter: str | None = None
    linkedin: str | None = None
    github: str | None = None

    @field_validator("website", "twitter", "linkedin", "github")
    @classmethod
    def _validate_link(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        if not SOCIAL_LINK_PATTERNS[info.field_name].match(value):
            raise ValueError(f"Invalid {info.field_name} link")
        return value


class RegisterRequest(CamelModel):
    """Schema for account registration."""

    username: str
    email: EmailStr
    password: str

    @field_validator("username")
    @classmethod
    def _check_username(cls, value: str) -> str:
        return validate_username(value)

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        return validate_new_password(value)


class LoginRequest(CamelModel):
    """Schema for login submissions."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class ChangePasswordRequest(CamelModel):
    """Schema for password changes by the account owner."""

    current_password: str = Field(..., min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def _check_new_password(cls, value: str) -> str:
        return validate_new_password(value, "New password")


class ProfileUpdateRequest(CamelModel):
    """Schema for updating the caller's own profile (JSON body)."""

    username: str | None = None
    bio: str | None = Field(None, max_length=500)
    avatar: str | None = None
    social_links: SocialLinks | None = None

    @field_validator("username")
    @classmethod
    def _check_username(cls, value: str | None) -> str | None:
        return None if value is None else validate_username(value)

    @field_validator("avatar")
    @classmethod
    def _check_avatar(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if value and not SOCIAL_LINK_PATTERNS["website"].match(value):
            raise ValueError("Avatar must be a valid URL")
        return value


class UserSummary(CamelModel):
    """Author block embedded in posts and comments."""

    id: int
    username: str
    avatar: str | None = None
    bio: str = ""


class UserPublic(UserSummary):
    """Public profile information."""

    description: str = ""
    social_links: dict[str, str | None] = Field(default_factory=dict)
    role: str
    created_at: datetime
    updated_at: datetime


class UserPrivate(UserPublic):
    """Profile information visible to the account owner and admins."""

    email: str
    is_active: bool
    last_login: datetime | None = None


class AuthResponse(CamelModel):
    """Token and profile returned after registration or login."""

    message: str
    token: str
    user: UserPrivate


class VerifyResponse(CamelModel):
    """Result of a token check."""

    valid: bool
    user: UserPrivate


class UserMutationResponse(CamelModel):
    """Acknowledgement carrying the updated profile."""

    message: str
    user: UserPrivate


class UserListResponse(CamelModel):
    """Admin listing of accounts."""

    users: list[UserPrivate]
    pagination: UserPagination
