from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from concerts.api.deps import get_now
from concerts.api.main import create_app
from concerts.core.config import Settings
from concerts.infra.db.sql_store import SqlEventStore
from concerts.jobs.seed_data import seed_database

FIXED_NOW = datetime(2025, 11, 5, 20, 30, tzinfo=timezone.utc)


def _build_client(store):
    settings = Settings(database_url="", reference_timezone="Europe/Stockholm")
    app = create_app(store=store, settings=settings, configure_logs=False)
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture()
def api_client(sqlite_engine, seed_file):
    seed_database(seed_file, engine=sqlite_engine)
    yield from _build_client(SqlEventStore(sqlite_engine))


@pytest.fixture()
def memory_api_client(memory_store):
    yield from _build_client(memory_store)
