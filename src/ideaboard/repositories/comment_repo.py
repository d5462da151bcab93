"""Data access helpers for comments."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ideaboard.models import Comment

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_active(self, comment_id: int) -> Comment | None:
        comment = self.session.get(Comment, comment_id)
        if comment is None or not comment.is_active:
            return None
        return comment

    def list_for_post(self, post_id: int) -> list[Comment]:
        """Return a post's active comments, oldest first."""
        stmt = (
            select(Comment)
            .where(Comment.post_id == post_id, Comment.is_active.is_(True))
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        return list(self.session.scalars(stmt))

    def add(self, comment: Comment) -> Comment:
        self.session.add(comment)
        self.session.flush()
        return comment

    def count_active(self) -> int:
        return int(
            self.session.scalar(
                select(func.count()).select_from(Comment).where(Comment.is_active.is_(True))
            )
            or 0
        )
