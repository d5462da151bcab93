"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import field_validator, model_validator

from .common import CamelModel
from .user import UserSummary


def validate_comment_content(value: str) -> str:
    value = value.strip()
    if not 1 <= len(value) <= 2000:
        raise ValueError("Comment must be between 1 and 2000 characters")
    return value


class CommentCreate(CamelModel):
    """Schema for adding a comment to a post."""

    content: str

    @field_validator("content")
    @classmethod
    def _check_content(cls, value: str) -> str:
        return validate_comment_content(value)


class CommentUpdate(CommentCreate):
    """Schema for editing a comment body."""


class CommentResponse(CamelModel):
    """Schema for comment information returned by the API."""

    id: int
    content: str
    post: int
    author: UserSummary
    likes: list[int]
    dislikes: list[int]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _flatten_orm(cls, data: object) -> object:
        if isinstance(data, dict):
            return data
        return {
            "id": data.id,
            "content": data.content,
            "post": data.post_id,
            "author": UserSummary.model_validate(data.author),
            "likes": list(data.liked_by),
            "dislikes": list(data.disliked_by),
            "is_active": data.is_active,
            "created_at": data.created_at,
            "updated_at": data.updated_at,
        }


class CommentMutationResponse(CamelModel):
    """Acknowledgement carrying the affected comment."""

    message: str
    comment: CommentResponse
