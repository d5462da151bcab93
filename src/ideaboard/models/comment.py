# src/ideaboard/models/comment.py
"""SQLAlchemy model for comments attached to posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ideaboard.db.session import Base
from ideaboard.db.time import utcnow

from .reaction import CommentReaction, ReactionSetsMixin

if TYPE_CHECKING:
    from .post import Post
    from .user import User


class Comment(ReactionSetsMixin, Base):
    """A reply attached to exactly one post. Comments are never hard-deleted."""

    __tablename__ = "comment"
    __table_args__ = (Index("ix_comment_post_created", "post_id", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id"),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    author: Mapped[User] = relationship("User", lazy="joined")
    post: Mapped[Post] = relationship("Post", back_populates="comments")
    reactions: Mapped[list[CommentReaction]] = relationship(
        CommentReaction,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
