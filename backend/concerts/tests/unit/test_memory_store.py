from __future__ import annotations

from datetime import datetime, timezone

import pytest

from concerts.domain.errors import DataIntegrityError
from concerts.domain.models import EventStatus
from concerts.infra.memory_store import InMemoryEventStore


def test_from_document_resolves_relations(memory_store):
    events = memory_store.list_events()
    assert [item.slug for item in events] == ["rock-night", "jazz-evening"]
    first = events[0]
    assert first.event.venue_id == first.venue.id
    assert first.event.artist_ids == tuple(artist.id for artist in first.artists)
    assert first.start_time == datetime(2025, 11, 5, 19, 0, tzinfo=timezone.utc)
    assert first.event.price == "295 kr"
    nattfjaril = first.artists[1]
    assert nattfjaril.social_links.instagram == "https://instagram.com/nattfjaril"
    assert nattfjaril.spotify_listeners == 182000


def test_venue_coordinates_loaded(memory_store):
    pustervik, nefertiti = memory_store.list_venues()
    assert pustervik.coordinates == (57.69968, 11.95311)
    assert pustervik.capacity == 650
    assert nefertiti.coordinates is None


def test_naive_times_are_read_in_reference_timezone(document_factory):
    naive = {
        "slug": "naive-times",
        "title": "Naive",
        "start_time": "2025-11-10T20:00:00",
        "end_time": "2025-11-10T22:00:00",
        "venue": "pustervik",
    }
    store = InMemoryEventStore.from_document(document_factory(extra_events=[naive]), "Europe/Stockholm")
    item = store.get_event("naive-times")
    assert item.start_time == datetime(2025, 11, 10, 19, 0, tzinfo=timezone.utc)


def test_unknown_venue_is_an_integrity_error(document_factory):
    broken = {
        "slug": "ghost-gig",
        "title": "Ghost",
        "start_time": "2025-11-10T20:00:00+01:00",
        "end_time": "2025-11-10T22:00:00+01:00",
        "venue": "nowhere",
    }
    with pytest.raises(DataIntegrityError, match="nowhere"):
        InMemoryEventStore.from_document(document_factory(extra_events=[broken]))


def test_unknown_genre_is_an_integrity_error(document_factory):
    broken = {
        "slug": "genre-gig",
        "title": "Genre",
        "start_time": "2025-11-10T20:00:00+01:00",
        "end_time": "2025-11-10T22:00:00+01:00",
        "venue": "pustervik",
        "genres": ["polka"],
    }
    with pytest.raises(DataIntegrityError, match="polka"):
        InMemoryEventStore.from_document(document_factory(extra_events=[broken]))


def test_duplicate_event_slug_is_an_integrity_error(document_factory, seed_document):
    duplicate = dict(seed_document["events"][0])
    with pytest.raises(DataIntegrityError, match="rock-night"):
        InMemoryEventStore.from_document(document_factory(extra_events=[duplicate]))


def test_inverted_span_is_an_integrity_error(document_factory):
    broken = {
        "slug": "backwards",
        "title": "Backwards",
        "start_time": "2025-11-10T22:00:00+01:00",
        "end_time": "2025-11-10T20:00:00+01:00",
        "venue": "pustervik",
    }
    with pytest.raises(DataIntegrityError):
        InMemoryEventStore.from_document(document_factory(extra_events=[broken]))


def test_bundled_seed_file_loads():
    store = InMemoryEventStore.from_file()
    events = store.list_events()
    assert events
    assert len({item.slug for item in events}) == len(events)
    cancelled = store.get_event("polarljus-tradgarn")
    assert cancelled.status(datetime(2020, 1, 1, tzinfo=timezone.utc)) is EventStatus.CANCELLED


def test_missing_seed_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        InMemoryEventStore.from_file(tmp_path / "missing.json")
