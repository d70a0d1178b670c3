from __future__ import annotations

from collections import defaultdict
from datetime import timezone
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import delete, insert, select
from sqlalchemy.engine import Connection, Engine

from concerts.domain.errors import DataIntegrityError
from concerts.domain.models import EventWithRelations
from concerts.infra.rows import artist_from_row, event_from_row, genre_from_row, venue_from_row

from .common import upsert_by_slug
from .tables import (
    artists_table,
    event_artists_table,
    event_genres_table,
    events_table,
    genres_table,
    venues_table,
)

EVENT_COLUMNS = [
    "slug",
    "title",
    "description",
    "start_time",
    "end_time",
    "venue_id",
    "is_cancelled",
    "ticket_url",
    "image_url",
    "price",
    "spotify_listeners",
]


class EventsRepository:
    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def upsert_event(
        self,
        event_data: Dict[str, Any],
        artist_ids: Sequence[int] = (),
        genre_ids: Sequence[int] = (),
    ) -> int:
        """Write an event and replace its lineup and genre join rows."""
        resolved = {col: event_data.get(col) for col in EVENT_COLUMNS}
        resolved["is_cancelled"] = bool(resolved["is_cancelled"])
        # Stored as UTC; SQLite keeps no offset.
        resolved["start_time"] = resolved["start_time"].astimezone(timezone.utc)
        resolved["end_time"] = resolved["end_time"].astimezone(timezone.utc)
        with self.engine.begin() as conn:
            event_id = upsert_by_slug(conn, events_table, resolved)
            conn.execute(delete(event_artists_table).where(event_artists_table.c.event_id == event_id))
            conn.execute(delete(event_genres_table).where(event_genres_table.c.event_id == event_id))
            if artist_ids:
                conn.execute(
                    insert(event_artists_table),
                    [
                        {"event_id": event_id, "artist_id": artist_id, "position": position}
                        for position, artist_id in enumerate(dict.fromkeys(artist_ids))
                    ],
                )
            if genre_ids:
                conn.execute(
                    insert(event_genres_table),
                    [{"event_id": event_id, "genre_id": genre_id} for genre_id in dict.fromkeys(genre_ids)],
                )
        return event_id

    def list_events_with_relations(self) -> List[EventWithRelations]:
        with self.engine.begin() as conn:
            return self._load(conn)

    def get_event_with_relations(self, slug: str) -> Optional[EventWithRelations]:
        if not slug:
            return None
        with self.engine.begin() as conn:
            items = self._load(conn, events_table.c.slug == slug)
        return items[0] if items else None

    def _load(self, conn: Connection, *filters) -> List[EventWithRelations]:
        stmt = select(events_table).order_by(events_table.c.id)
        if filters:
            stmt = stmt.where(*filters)
        event_rows = conn.execute(stmt).mappings().all()
        if not event_rows:
            return []
        event_ids = [row["id"] for row in event_rows]

        venue_ids = {row["venue_id"] for row in event_rows}
        venues = {
            row["id"]: venue_from_row(row)
            for row in conn.execute(
                select(venues_table).where(venues_table.c.id.in_(venue_ids))
            ).mappings()
        }

        lineups = defaultdict(list)
        lineup_rows = conn.execute(
            select(event_artists_table.c.event_id, artists_table)
            .select_from(
                event_artists_table.join(artists_table, event_artists_table.c.artist_id == artists_table.c.id)
            )
            .where(event_artists_table.c.event_id.in_(event_ids))
            .order_by(event_artists_table.c.event_id, event_artists_table.c.position)
        ).mappings()
        for row in lineup_rows:
            lineups[row["event_id"]].append(artist_from_row(row))

        event_genres = defaultdict(list)
        genre_rows = conn.execute(
            select(event_genres_table.c.event_id, genres_table)
            .select_from(
                event_genres_table.join(genres_table, event_genres_table.c.genre_id == genres_table.c.id)
            )
            .where(event_genres_table.c.event_id.in_(event_ids))
            .order_by(event_genres_table.c.event_id, genres_table.c.id)
        ).mappings()
        for row in genre_rows:
            event_genres[row["event_id"]].append(genre_from_row(row))

        items = []
        for row in event_rows:
            venue = venues.get(row["venue_id"])
            if venue is None:
                raise DataIntegrityError(f"Event '{row['slug']}' references missing venue id {row['venue_id']}")
            artists = lineups.get(row["id"], [])
            genres = event_genres.get(row["id"], [])
            event = event_from_row(
                row,
                artist_ids=[artist.id for artist in artists],
                genre_ids=[genre.id for genre in genres],
            )
            items.append(EventWithRelations(event=event, venue=venue, artists=artists, genres=genres))
        return items
