"""Aggregate counter schemas."""

from .common import CamelModel


class PlatformStats(CamelModel):
    """Platform-wide counts of active records."""

    total_posts: int
    total_users: int
    total_comments: int


class UserStats(CamelModel):
    """Totals over one user's active posts."""

    total_posts: int
    total_likes: int
    total_views: int
    total_comments: int
