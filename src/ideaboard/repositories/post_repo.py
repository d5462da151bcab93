"""Data access helpers for working with posts."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import ColumnElement, func, select, update
from sqlalchemy.orm import Session

from ideaboard.models import LIKE, Comment, Post, PostReaction, PostTag

__all__ = ["PostFilters", "PostRepository", "SORT_FIELDS"]


def _likes_count() -> Any:
    return (
        select(func.count())
        .where(PostReaction.post_id == Post.id, PostReaction.kind == LIKE)
        .correlate(Post)
        .scalar_subquery()
    )


def _comments_count() -> Any:
    return (
        select(func.count())
        .where(Comment.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )


# Public sort keys (camelCase as sent by clients) mapped onto SQL expressions.
SORT_FIELDS: dict[str, Any] = {
    "createdAt": lambda: Post.created_at,
    "updatedAt": lambda: Post.updated_at,
    "views": lambda: Post.views,
    "title": lambda: Post.title,
    "type": lambda: Post.type,
    "isPinned": lambda: Post.is_pinned,
    "likes": _likes_count,
    "comments": _comments_count,
}


@dataclass
class PostFilters:
    """Filter, sort and page options for listing active posts."""

    page: int = 1
    limit: int = 20
    sort_by: str = "createdAt"
    ascending: bool = False
    type: str | None = None
    author_id: int | None = None
    tags: list[str] = field(default_factory=list)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier regardless of its active flag."""
        return self.session.get(Post, post_id)

    def get_active(self, post_id: int) -> Post | None:
        """Return a post only if it has not been soft-deleted."""
        post = self.get_by_id(post_id)
        if post is None or not post.is_active:
            return None
        return post

    def add(self, post: Post) -> Post:
        """Stage a new post and flush so it receives an identifier."""
        self.session.add(post)
        self.session.flush()
        return post

    def _filtered(self, filters: PostFilters) -> Any:
        conditions: list[ColumnElement[bool]] = [Post.is_active.is_(True)]
        if filters.type:
            conditions.append(Post.type == filters.type)
        if filters.author_id is not None:
            conditions.append(Post.author_id == filters.author_id)
        if filters.tags:
            tagged = select(PostTag.post_id).where(PostTag.tag.in_(filters.tags))
            conditions.append(Post.id.in_(tagged))
        return select(Post).where(*conditions)

    def list(self, filters: PostFilters) -> tuple[list[Post], int]:
        """Return one page of active posts matching ``filters`` and the total match count."""
        stmt = self._filtered(filters)
        total = self.session.scalar(select(func.count()).select_from(stmt.subquery())) or 0

        sort_expr = SORT_FIELDS[filters.sort_by]()
        if filters.ascending:
            ordering = (sort_expr.asc(), Post.id.asc())
        else:
            ordering = (sort_expr.desc(), Post.id.desc())
        page = stmt.order_by(*ordering).offset(filters.offset).limit(filters.limit)
        return list(self.session.scalars(page)), int(total)

    def list_by_author(self, author_id: int) -> list[Post]:
        """Return a user's active posts, newest first."""
        stmt = (
            select(Post)
            .where(Post.author_id == author_id, Post.is_active.is_(True))
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        return list(self.session.scalars(stmt))

    def increment_views(self, post_id: int) -> int:
        """Add one view in SQL so concurrent increments are not lost."""
        self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(views=Post.views + 1)
            .execution_options(synchronize_session="fetch")
        )
        return int(self.session.scalar(select(Post.views).where(Post.id == post_id)) or 0)

    def deactivate_by_author(self, author_id: int) -> int:
        """Soft-delete every post of ``author_id``; return the number of rows touched."""
        result = self.session.execute(
            update(Post)
            .where(Post.author_id == author_id, Post.is_active.is_(True))
            .values(is_active=False)
            .execution_options(synchronize_session="fetch")
        )
        return int(result.rowcount or 0)

    def count_active(self) -> int:
        return int(
            self.session.scalar(
                select(func.count()).select_from(Post).where(Post.is_active.is_(True))
            )
            or 0
        )

    def author_totals(self, author_id: int) -> dict[str, int]:
        """Sum posts, likes, views and comments over an author's active posts."""
        active = (Post.author_id == author_id, Post.is_active.is_(True))

        posts, views = self.session.execute(
            select(func.count(Post.id), func.coalesce(func.sum(Post.views), 0)).where(*active)
        ).one()
        likes = self.session.scalar(
            select(func.count())
            .select_from(PostReaction)
            .join(Post, Post.id == PostReaction.post_id)
            .where(PostReaction.kind == LIKE, *active)
        )
        comments = self.session.scalar(
            select(func.count())
            .select_from(Comment)
            .join(Post, Post.id == Comment.post_id)
            .where(*active)
        )
        return {
            "total_posts": int(posts or 0),
            "total_likes": int(likes or 0),
            "total_views": int(views or 0),
            "total_comments": int(comments or 0),
        }
