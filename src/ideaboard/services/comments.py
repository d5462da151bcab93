"""Service-level helpers for comments on posts."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from ideaboard.core.errors import NotFound, PermissionDenied
from ideaboard.db.time import utcnow
from ideaboard.models import Comment, User
from ideaboard.repositories import CommentRepository
from ideaboard.services.posts import get_active_post
from ideaboard.services.reactions import ReactionOutcome, toggle_reaction

logger = logging.getLogger(__name__)


def list_comments(db: Session, post_id: int) -> list[Comment]:
    return CommentRepository(db).list_for_post(post_id)


def add_comment(db: Session, post_id: int, author: User, content: str) -> Comment:
    """Attach a comment to an active post.

    The comment row and the parent's reference to it are written in one
    commit, so a failure cannot leave an unreferenced comment behind.
    """
    post = get_active_post(db, post_id)
    comment = Comment(content=content, author_id=author.id, post_id=post.id)
    post.comments.append(comment)
    post.updated_at = utcnow()
    CommentRepository(db).add(comment)
    db.commit()
    db.refresh(comment)
    logger.info("User %s commented on post %s", author.id, post_id)
    return comment


def get_post_comment(db: Session, post_id: int, comment_id: int) -> Comment:
    comment = CommentRepository(db).get_active(comment_id)
    if comment is None or comment.post_id != post_id:
        raise NotFound("Comment not found")
    return comment


def update_comment(
    db: Session,
    post_id: int,
    comment_id: int,
    user: User,
    content: str,
) -> Comment:
    """Replace a comment body; only its author may do so."""
    comment = get_post_comment(db, post_id, comment_id)
    if comment.author_id != user.id:
        raise PermissionDenied("Not authorized to edit this comment")
    comment.content = content
    db.commit()
    db.refresh(comment)
    return comment


def react_to_comment(
    db: Session,
    post_id: int,
    comment_id: int,
    user: User,
    kind: int,
) -> tuple[Comment, ReactionOutcome]:
    comment = get_post_comment(db, post_id, comment_id)
    outcome = toggle_reaction(db, comment, user.id, kind)
    return comment, outcome
