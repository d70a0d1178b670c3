from __future__ import annotations

import json
import logging

import pytest
from fastapi.testclient import TestClient

from concerts.api.main import create_app
from concerts.core.config import Settings
from concerts.domain.store import EventStore
from concerts.infra.db.sql_store import SqlEventStore
from concerts.jobs.seed_data import seed_database


class BrokenStore(EventStore):
    def list_events(self):
        raise RuntimeError("connection reset")

    def get_event(self, slug):
        raise RuntimeError("connection reset")

    def list_venues(self):
        raise RuntimeError("connection reset")

    def list_genres(self):
        raise RuntimeError("connection reset")


def _client(store):
    settings = Settings(database_url="", reference_timezone="Europe/Stockholm")
    app = create_app(store=store, settings=settings, configure_logs=False)
    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.parametrize("path", ["/api/events", "/api/events/rock-night", "/api/venues", "/api/genres"])
def test_unexpected_error_returns_json_500(path, caplog):
    with caplog.at_level(logging.ERROR, logger="concerts.api.main"):
        with _client(BrokenStore()) as client:
            response = client.get(path)

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"error": "Internal server error", "status_code": 500}
    logged = [record for record in caplog.records if record.getMessage() == "unhandled exception"]
    assert logged
    assert logged[0].exc_info is not None


def test_unknown_route_uses_error_shape(memory_api_client):
    response = memory_api_client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found", "status_code": 404}


def test_half_coordinate_venue_does_not_break_api(sqlite_engine, tmp_path, document_factory):
    document = document_factory()
    document["venues"][1]["coordinates"] = {"lat": 57.7}
    path = tmp_path / "half.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    stats = seed_database(path, engine=sqlite_engine)
    # The jazz evening loses its venue and is skipped with it.
    assert stats["skipped"] == 2

    with _client(SqlEventStore(sqlite_engine)) as client:
        venues = client.get("/api/venues")
        events = client.get("/api/events")

    assert venues.status_code == 200
    assert [venue["slug"] for venue in venues.json()] == ["pustervik"]
    assert events.status_code == 200
    assert [item["slug"] for item in events.json()] == ["rock-night"]
