"""Data access layer over the SQLAlchemy session."""

from .comment_repo import CommentRepository
from .post_repo import PostFilters, PostRepository
from .user_repo import UserRepository

__all__ = [
    "CommentRepository",
    "PostFilters",
    "PostRepository",
    "UserRepository",
]
