"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ideaboard.db.time import as_utc


class CamelModel(BaseModel):
    """Base model that reads snake_case or camelCase and writes camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @field_validator("*", mode="after")
    @classmethod
    def _timestamps_in_utc(cls, value: Any) -> Any:
        return as_utc(value) if isinstance(value, datetime) else value


class MessageResponse(CamelModel):
    """Plain acknowledgement payload."""

    message: str


class Pagination(CamelModel):
    """Offset pagination metadata returned by list endpoints."""

    current_page: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, *, page: int, limit: int, total: int, **extra: int) -> Pagination:
        """Compute page counts for ``total`` items split into pages of ``limit``."""
        return cls(
            current_page=page,
            total_pages=math.ceil(total / limit) if limit else 0,
            has_next=page * limit < total,
            has_prev=page > 1,
            **extra,
        )


class PostPagination(Pagination):
    """Pagination block for post listings."""

    total_posts: int


class UserPagination(Pagination):
    """Pagination block for user listings."""

    total_users: int
