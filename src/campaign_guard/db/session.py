"""Database session configuration."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from campaign_guard.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import campaign_guard.models  # noqa: E402,F401


def engine_options(url: str, timeout_seconds: float) -> dict[str, Any]:
    """Return driver options that bound how long a write may block.

    Args:
        url: SQLAlchemy database URL.
        timeout_seconds: Maximum wait for a connection, lock, or statement.

    Returns:
        Keyword arguments for ``create_engine``.
    """
    options: dict[str, Any] = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        options["connect_args"] = {"timeout": timeout_seconds, "check_same_thread": False}
        return options

    options["pool_timeout"] = timeout_seconds
    if url.startswith("postgresql"):
        options["connect_args"] = {
            "connect_timeout": max(1, int(timeout_seconds)),
            "options": f"-c statement_timeout={int(timeout_seconds * 1000)}",
        }
    return options


engine = create_engine(
    settings.effective_database_url,
    echo=settings.sql_debug,
    **engine_options(settings.effective_database_url, settings.persistence_timeout_seconds),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session, rolling back anything left uncommitted."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def create_tables() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """Drop all database tables."""
    Base.metadata.drop_all(bind=engine)
