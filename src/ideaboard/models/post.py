# src/ideaboard/models/post.py
"""SQLAlchemy models for posts and their tags."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ideaboard.db.session import Base
from ideaboard.db.time import utcnow

from .reaction import PostReaction, ReactionSetsMixin

if TYPE_CHECKING:
    from .comment import Comment
    from .user import User

POST_TYPES = ("question", "idea", "discussion")


class Post(ReactionSetsMixin, Base):
    """A question, idea or discussion authored by a user."""

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint("type IN ('question', 'idea', 'discussion')", name="ck_post_type"),
        Index("ix_post_author_created", "author_id", "created_at"),
        Index("ix_post_type_created", "type", "created_at"),
        Index("ix_post_pinned_created", "is_pinned", "created_at"),
        Index("ix_post_created", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    # Fixed at creation.
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    author: Mapped[User] = relationship("User", lazy="joined")
    tag_rows: Mapped[list[PostTag]] = relationship(
        "PostTag",
        order_by="PostTag.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    reactions: Mapped[list[PostReaction]] = relationship(
        PostReaction,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        order_by="Comment.id",
        lazy="selectin",
    )

    @property
    def tags(self) -> list[str]:
        """Return tags in the order they were supplied."""
        return [row.tag for row in self.tag_rows]

    @tags.setter
    def tags(self, values: Iterable[str]) -> None:
        self.tag_rows = [PostTag(position=i, tag=tag) for i, tag in enumerate(values)]

    @property
    def comment_ids(self) -> list[int]:
        return [comment.id for comment in self.comments]


class PostTag(Base):
    """One lower-cased tag attached to a post."""

    __tablename__ = "post_tag"
    __table_args__ = (Index("ix_post_tag_tag", "tag"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    tag: Mapped[str] = mapped_column(String(50), nullable=False)
