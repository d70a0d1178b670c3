from __future__ import annotations

import copy
import json

import pytest

from concerts.infra.database import build_engine
from concerts.infra.db.tables import metadata
from concerts.infra.memory_store import InMemoryEventStore

BASE_DOCUMENT = {
    "genres": [
        {"name": "Rock", "slug": "rock", "color": "#e4572e"},
        {"name": "Jazz", "slug": "jazz", "color": "#3b8ea5"},
        {"name": "Indie", "slug": "indie"},
    ],
    "artists": [
        {"name": "Nattfjäril", "slug": "nattfjaril", "spotify_listeners": 182000,
         "social_links": {"instagram": "https://instagram.com/nattfjaril"}},
        {"name": "Slussen Syndikat", "slug": "slussen-syndikat"},
        {"name": "Blå Timmen Kvartett", "slug": "bla-timmen-kvartett"},
    ],
    "venues": [
        {"name": "Pustervik", "slug": "pustervik", "address": "Järntorgsgatan 12", "city": "Göteborg",
         "capacity": 650, "coordinates": {"lat": 57.69968, "lng": 11.95311}},
        {"name": "Nefertiti", "slug": "nefertiti", "address": "Hvitfeldtsplatsen 6", "city": "Göteborg"},
    ],
    "events": [
        {
            "slug": "rock-night",
            "title": "Rock Night",
            "start_time": "2025-11-05T20:00:00+01:00",
            "end_time": "2025-11-05T23:00:00+01:00",
            "venue": "pustervik",
            "artists": ["slussen-syndikat", "nattfjaril"],
            "genres": ["rock"],
            "price": "295 kr",
        },
        {
            "slug": "jazz-evening",
            "title": "Jazz Evening",
            "start_time": "2025-12-01T19:30:00+01:00",
            "end_time": "2025-12-01T22:00:00+01:00",
            "venue": "nefertiti",
            "artists": ["bla-timmen-kvartett"],
            "genres": ["jazz"],
        },
    ],
}


def make_document(extra_events=(), events=None):
    document = copy.deepcopy(BASE_DOCUMENT)
    if events is not None:
        document["events"] = copy.deepcopy(list(events))
    document["events"].extend(copy.deepcopy(list(extra_events)))
    return document


@pytest.fixture()
def seed_document():
    return make_document()


@pytest.fixture()
def memory_store(seed_document):
    return InMemoryEventStore.from_document(seed_document)


@pytest.fixture()
def seed_file(tmp_path, seed_document):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(seed_document), encoding="utf-8")
    return path


@pytest.fixture()
def sqlite_engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'concerts.db'}")
    metadata.create_all(engine)
    yield engine
    metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def document_factory():
    return make_document
