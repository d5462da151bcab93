"""Grant the admin role to an existing account.

Usage:
    python -m ideaboard.scripts.promote_admin <username>
"""

from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.orm import Session

from ideaboard.core.logging import configure_logging
from ideaboard.db import SessionLocal
from ideaboard.models import ROLE_ADMIN
from ideaboard.repositories import UserRepository

logger = logging.getLogger(__name__)


def promote(db: Session, username: str) -> bool:
    """Set the admin role on ``username``; return False if no such account exists."""
    user = UserRepository(db).get_by_username(username)
    if user is None:
        return False
    user.role = ROLE_ADMIN
    db.commit()
    logger.info("Promoted %s (id=%s) to admin", user.username, user.id)
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("username")
    args = parser.parse_args(argv)

    configure_logging()
    db = SessionLocal()
    try:
        if not promote(db, args.username):
            logger.error("No user named %s", args.username)
            return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
