# src/ideaboard/models/__init__.py
"""SQLAlchemy models for the Ideaboard application."""

from .comment import Comment
from .post import Post, PostTag
from .reaction import DISLIKE, LIKE, CommentReaction, PostReaction
from .user import ROLE_ADMIN, ROLE_MODERATOR, ROLE_USER, USER_ROLES, User

__all__ = [
    "Comment",
    "Post", "PostTag",
    "CommentReaction", "PostReaction", "LIKE", "DISLIKE",
    "User", "USER_ROLES", "ROLE_USER", "ROLE_MODERATOR", "ROLE_ADMIN",
]
