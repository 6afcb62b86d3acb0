# src/campaign_guard/db/__init__.py
"""Database engine, sessions and time helpers."""

from .session import Base, SessionLocal, create_tables, drop_tables, engine_options, get_db
from .time import as_utc, utcnow

__all__ = [
    "Base",
    "SessionLocal",
    "as_utc",
    "create_tables",
    "drop_tables",
    "engine_options",
    "get_db",
    "utcnow",
]
