"""Create all tables for the configured database.

Usage:
    python -m ideaboard.scripts.ensure_db
"""

import logging

from ideaboard.core.logging import configure_logging
from ideaboard.core.settings import settings
from ideaboard.db import create_tables

logger = logging.getLogger(__name__)


def main() -> None:
    configure_logging()
    create_tables()
    logger.info("Tables ensured on %s", settings.effective_database_url)


if __name__ == "__main__":
    main()
