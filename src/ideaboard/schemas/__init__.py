# src/ideaboard/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
Responses are serialised with camelCase keys.
"""

from .comment import CommentCreate, CommentMutationResponse, CommentResponse, CommentUpdate
from .common import MessageResponse, Pagination
from .post import (
    PostCreate,
    PostListResponse,
    PostMutationResponse,
    PostResponse,
    PostUpdate,
    ViewResponse,
)
from .stats import PlatformStats, UserStats
from .user import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    SocialLinks,
    UserListResponse,
    UserPrivate,
    UserPublic,
    UserSummary,
)

__all__ = [
    "CommentCreate", "CommentMutationResponse", "CommentResponse", "CommentUpdate",
    "MessageResponse", "Pagination",
    "PostCreate", "PostListResponse", "PostMutationResponse", "PostResponse", "PostUpdate",
    "ViewResponse",
    "PlatformStats", "UserStats",
    "AuthResponse", "ChangePasswordRequest", "LoginRequest", "ProfileUpdateRequest",
    "RegisterRequest", "SocialLinks", "UserListResponse", "UserPrivate", "UserPublic",
    "UserSummary",
]
