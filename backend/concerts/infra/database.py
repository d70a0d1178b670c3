from __future__ import annotations

from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from concerts.core.config import get_settings


def build_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections get foreign keys switched on."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, future=True)
    engine = create_engine(database_url, connect_args={"check_same_thread": False}, future=True)

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


@lru_cache(maxsize=4)
def get_engine(database_url: Optional[str] = None) -> Engine:
    database_url = database_url or get_settings().database_url
    if not database_url:
        raise RuntimeError("DATABASE_URL environment variable is not set")
    return build_engine(database_url)
