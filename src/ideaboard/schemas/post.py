"""Post-related Pydantic schemas."""

from collections.abc import Iterable
from datetime import datetime
from typing import Literal

from pydantic import field_validator, model_validator

from .common import CamelModel, PostPagination
from .user import UserSummary

PostType = Literal["question", "idea", "discussion"]

MAX_TAGS = 10
MAX_TAG_LENGTH = 50


def validate_title(value: str) -> str:
    value = value.strip()
    if not 5 <= len(value) <= 200:
        raise ValueError("Title must be between 5 and 200 characters")
    return value


def validate_content(value: str) -> str:
    value = value.strip()
    if not 10 <= len(value) <= 10_000:
        raise ValueError("Content must be between 10 and 10000 characters")
    return value


def normalize_tags(values: Iterable[str]) -> list[str]:
    """Trim, lower-case and de-duplicate tags while keeping their order."""
    values = list(values)
    if len(values) > MAX_TAGS:
        raise ValueError(f"Maximum {MAX_TAGS} tags allowed")
    tags: list[str] = []
    for raw in values:
        tag = raw.strip().lower()
        if not tag:
            continue
        if len(tag) > MAX_TAG_LENGTH:
            raise ValueError(f"Tags must be at most {MAX_TAG_LENGTH} characters")
        if tag not in tags:
            tags.append(tag)
    return tags


class PostCreate(CamelModel):
    """Schema for creating a new post."""

    title: str
    content: str
    type: PostType
    tags: list[str] = []

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str) -> str:
        return validate_title(value)

    @field_validator("content")
    @classmethod
    def _check_content(cls, value: str) -> str:
        return validate_content(value)

    @field_validator("tags")
    @classmethod
    def _check_tags(cls, value: list[str]) -> list[str]:
        return normalize_tags(value)


class PostUpdate(CamelModel):
    """Schema for editing a post; omitted fields are left unchanged."""

    title: str | None = None
    content: str | None = None
    type: PostType | None = None
    tags: list[str] | None = None

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str | None) -> str | None:
        return None if value is None else validate_title(value)

    @field_validator("content")
    @classmethod
    def _check_content(cls, value: str | None) -> str | None:
        return None if value is None else validate_content(value)

    @field_validator("tags")
    @classmethod
    def _check_tags(cls, value: list[str] | None) -> list[str] | None:
        return None if value is None else normalize_tags(value)


class PostResponse(CamelModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    content: str
    type: str
    tags: list[str]
    author: UserSummary
    likes: list[int]
    dislikes: list[int]
    likes_count: int
    dislikes_count: int
    views: int
    comments: list[int]
    comment_count: int
    is_active: bool
    is_pinned: bool
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _flatten_orm(cls, data: object) -> object:
        if isinstance(data, dict):
            return data

        liked_by = list(data.liked_by)
        disliked_by = list(data.disliked_by)
        comment_ids = list(data.comment_ids)
        return {
            "id": data.id,
            "title": data.title,
            "content": data.content,
            "type": data.type,
            "tags": list(data.tags),
            "author": UserSummary.model_validate(data.author),
            "likes": liked_by,
            "dislikes": disliked_by,
            "likes_count": len(liked_by),
            "dislikes_count": len(disliked_by),
            "views": data.views,
            "comments": comment_ids,
            "comment_count": len(comment_ids),
            "is_active": data.is_active,
            "is_pinned": data.is_pinned,
            "created_at": data.created_at,
            "updated_at": data.updated_at,
        }


class PostMutationResponse(CamelModel):
    """Acknowledgement carrying the affected post."""

    message: str
    post: PostResponse


class PostListResponse(CamelModel):
    """A page of posts and its pagination metadata."""

    posts: list[PostResponse]
    pagination: PostPagination


class ViewResponse(CamelModel):
    """Current view count after a view was recorded."""

    views: int
