from __future__ import annotations

import logging
from datetime import tzinfo
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, TypeVar
from zoneinfo import ZoneInfo

from concerts.core.config import DEFAULT_TIMEZONE
from concerts.domain.errors import DataIntegrityError
from concerts.domain.models import Artist, Event, EventWithRelations, Genre, Venue
from concerts.domain.store import EventStore
from concerts.infra.rows import artist_from_row, event_from_row, genre_from_row, venue_from_row
from concerts.infra.seed_document import (
    artist_payload,
    event_payload,
    genre_payload,
    load_seed_document,
    venue_payload,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", Venue, Artist, Genre, Event)


class InMemoryEventStore(EventStore):
    """Event store held entirely in memory.

    Relations are resolved once at construction. A dangling reference or a
    duplicate slug raises DataIntegrityError instead of being dropped.
    """

    def __init__(
        self,
        venues: Sequence[Venue],
        artists: Sequence[Artist],
        genres: Sequence[Genre],
        events: Sequence[Event],
    ) -> None:
        self._venues = list(venues)
        self._genres = list(genres)
        artists = list(artists)
        events = list(events)
        venues_by_id = _index_by_id("venue", self._venues)
        artists_by_id = _index_by_id("artist", artists)
        genres_by_id = _index_by_id("genre", self._genres)
        for kind, items in (("venue", self._venues), ("artist", artists), ("genre", self._genres), ("event", events)):
            _ensure_unique_slugs(kind, items)

        self._events: List[EventWithRelations] = []
        for event in events:
            self._events.append(
                EventWithRelations(
                    event=event,
                    venue=_resolve(venues_by_id, event.venue_id, "venue", event),
                    artists=tuple(_resolve(artists_by_id, aid, "artist", event) for aid in event.artist_ids),
                    genres=tuple(_resolve(genres_by_id, gid, "genre", event) for gid in event.genre_ids),
                )
            )
        self._events_by_slug = {item.slug: item for item in self._events}

    @classmethod
    def from_document(cls, document: Dict[str, Any], reference_tz: tzinfo | str = DEFAULT_TIMEZONE) -> "InMemoryEventStore":
        tz = ZoneInfo(reference_tz) if isinstance(reference_tz, str) else reference_tz
        try:
            genres = [genre_from_row(_with_id(i, genre_payload(r))) for i, r in _numbered(document.get("genres"))]
            artists = [artist_from_row(_with_id(i, artist_payload(r))) for i, r in _numbered(document.get("artists"))]
            venues = [venue_from_row(_with_id(i, venue_payload(r))) for i, r in _numbered(document.get("venues"))]
        except ValueError as exc:
            raise DataIntegrityError(f"Invalid seed record: {exc}") from exc

        genre_ids = {genre.slug: genre.id for genre in genres}
        artist_ids = {artist.slug: artist.id for artist in artists}
        venue_ids = {venue.slug: venue.id for venue in venues}

        events = []
        for idx, record in _numbered(document.get("events")):
            try:
                payload, refs = event_payload(record, tz)
            except ValueError as exc:
                raise DataIntegrityError(f"Invalid event record #{idx}: {exc}") from exc
            row = _with_id(idx, payload)
            row["venue_id"] = _lookup(venue_ids, refs.venue, "venue", payload["slug"])
            events.append(
                event_from_row(
                    row,
                    artist_ids=[_lookup(artist_ids, slug, "artist", payload["slug"]) for slug in refs.artists],
                    genre_ids=[_lookup(genre_ids, slug, "genre", payload["slug"]) for slug in refs.genres],
                )
            )
        return cls(venues=venues, artists=artists, genres=genres, events=events)

    @classmethod
    def from_file(cls, path: str | Path | None = None, reference_tz: tzinfo | str = DEFAULT_TIMEZONE) -> "InMemoryEventStore":
        store = cls.from_document(load_seed_document(path), reference_tz)
        logger.info(
            "in-memory store loaded",
            extra={"seed_file": str(path) if path else "bundled", "events": len(store._events)},
        )
        return store

    def list_events(self) -> List[EventWithRelations]:
        return list(self._events)

    def get_event(self, slug: str) -> Optional[EventWithRelations]:
        return self._events_by_slug.get(slug)

    def list_venues(self) -> List[Venue]:
        return list(self._venues)

    def list_genres(self) -> List[Genre]:
        return list(self._genres)


def _numbered(records: Optional[Iterable[Dict[str, Any]]]):
    return enumerate(records or [], start=1)


def _with_id(idx: int, payload: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": str(idx), **payload}


def _lookup(ids_by_slug: Dict[str, str], slug: str, kind: str, event_slug: str) -> str:
    try:
        return ids_by_slug[slug]
    except KeyError:
        logger.error("dangling reference", extra={"event": event_slug, "kind": kind, "slug": slug})
        raise DataIntegrityError(f"Event '{event_slug}' references unknown {kind} '{slug}'") from None


def _index_by_id(kind: str, items: Iterable[T]) -> Dict[str, T]:
    index: Dict[str, T] = {}
    for item in items:
        if item.id in index:
            raise DataIntegrityError(f"Duplicate {kind} id '{item.id}'")
        index[item.id] = item
    return index


def _ensure_unique_slugs(kind: str, items: Iterable[T]) -> None:
    seen = set()
    for item in items:
        if item.slug in seen:
            raise DataIntegrityError(f"Duplicate {kind} slug '{item.slug}'")
        seen.add(item.slug)


def _resolve(index: Dict[str, T], item_id: str, kind: str, event: Event) -> T:
    try:
        return index[item_id]
    except KeyError:
        logger.error("dangling reference", extra={"event": event.slug, "kind": kind, "id": item_id})
        raise DataIntegrityError(f"Event '{event.slug}' references unknown {kind} id '{item_id}'") from None
