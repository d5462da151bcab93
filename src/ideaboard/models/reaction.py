# src/ideaboard/models/reaction.py
"""Like/dislike membership rows for posts and comments.

Each identity holds at most one row per target, so the liked-by and
disliked-by sets of a record are disjoint by construction.
"""

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column

from ideaboard.db.session import Base

LIKE = 1
DISLIKE = -1


class PostReaction(Base):
    """Per-user like or dislike on a post."""

    __tablename__ = "post_reaction"
    __table_args__ = (
        CheckConstraint("kind IN (1, -1)", name="ck_post_reaction_kind"),
        Index("ix_post_reaction_post_id", "post_id"),
    )

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        primary_key=True,
    )
    # 1 = like, -1 = dislike.
    kind: Mapped[int] = mapped_column(SmallInteger, nullable=False)


class CommentReaction(Base):
    """Per-user like or dislike on a comment."""

    __tablename__ = "comment_reaction"
    __table_args__ = (
        CheckConstraint("kind IN (1, -1)", name="ck_comment_reaction_kind"),
        Index("ix_comment_reaction_comment_id", "comment_id"),
    )

    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        primary_key=True,
    )
    kind: Mapped[int] = mapped_column(SmallInteger, nullable=False)


class ReactionSetsMixin:
    """Expose the reaction rows of a record as liked-by / disliked-by id lists."""

    @property
    def liked_by(self) -> list[int]:
        return [row.user_id for row in self.reactions if row.kind == LIKE]

    @property
    def disliked_by(self) -> list[int]:
        return [row.user_id for row in self.reactions if row.kind == DISLIKE]
