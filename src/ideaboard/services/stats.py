"""On-demand counters for dashboards; nothing here is cached."""
from __future__ import annotations

from sqlalchemy.orm import Session

from ideaboard.core.errors import NotFound, PermissionDenied
from ideaboard.models import User
from ideaboard.repositories import CommentRepository, PostRepository, UserRepository
from ideaboard.schemas.stats import PlatformStats, UserStats


def platform_stats(db: Session) -> PlatformStats:
    """Count active posts, users and comments."""
    return PlatformStats(
        total_posts=PostRepository(db).count_active(),
        total_users=UserRepository(db).count_active(),
        total_comments=CommentRepository(db).count_active(),
    )


def user_stats(db: Session, actor: User, user_id: int) -> UserStats:
    """Totals over ``user_id``'s active posts; visible to that user and admins."""
    if actor.id != user_id and not actor.is_admin:
        raise PermissionDenied("Not authorized")
    if UserRepository(db).get_by_id(user_id) is None:
        raise NotFound("User not found")
    return UserStats(**PostRepository(db).author_totals(user_id))
