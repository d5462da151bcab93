"""Data access helpers for user accounts."""
from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ideaboard.models import User

__all__ = ["UserRepository"]


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class UserRepository:
    """Lookups and listings over the account table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.session.scalars(select(User).where(User.email == email.lower())).first()

    def get_by_username(self, username: str) -> User | None:
        """Case-insensitive handle lookup across active and inactive accounts."""
        stmt = select(User).where(func.lower(User.username) == username.lower())
        return self.session.scalars(stmt).first()

    def add(self, user: User) -> User:
        self.session.add(user)
        self.session.flush()
        return user

    def list(self, *, search: str = "", page: int = 1, limit: int = 20) -> tuple[list[User], int]:
        """Return a page of accounts, newest first, optionally filtered by a search term."""
        stmt = select(User)
        if search:
            pattern = f"%{_escape_like(search.lower())}%"
            stmt = stmt.where(
                or_(
                    func.lower(User.username).like(pattern, escape="\\"),
                    User.email.like(pattern, escape="\\"),
                )
            )
        total = self.session.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        stmt = (
            stmt.order_by(User.created_at.desc(), User.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(self.session.scalars(stmt)), int(total)

    def count_active(self) -> int:
        return int(
            self.session.scalar(
                select(func.count()).select_from(User).where(User.is_active.is_(True))
            )
            or 0
        )
