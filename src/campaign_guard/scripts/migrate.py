# src/campaign_guard/scripts/migrate.py
"""Apply Alembic migrations up to head, or create tables directly for local SQLite use."""
from __future__ import annotations

import argparse
import logging
import os

from alembic import command
from alembic.config import Config

from campaign_guard.core.logging import configure_logging
from campaign_guard.core.settings import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations")
)


def run_upgrade_head() -> None:
    """Upgrade the configured database to the latest revision."""
    cfg = Config(os.path.join(MIGRATIONS_DIR, "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", settings.effective_database_url)
    cfg.set_main_option("script_location", MIGRATIONS_DIR)
    command.upgrade(cfg, "head")
    logger.info("Database upgraded to head")


def create_all() -> None:
    """Create tables from the ORM metadata without Alembic bookkeeping."""
    from campaign_guard.db.session import create_tables

    create_tables()
    logger.info("Tables created from ORM metadata")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--create-all",
        action="store_true",
        help="create tables from the models instead of running migrations",
    )
    args = parser.parse_args(argv)

    configure_logging()
    if args.create_all:
        create_all()
    else:
        run_upgrade_head()


if __name__ == "__main__":
    main()
