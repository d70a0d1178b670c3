from __future__ import annotations

from typing import List, Optional

from sqlalchemy.engine import Engine

from concerts.domain.models import EventWithRelations, Genre, Venue
from concerts.domain.store import EventStore

from .events_repository import EventsRepository
from .genres_repository import GenresRepository
from .venues_repository import VenuesRepository


class SqlEventStore(EventStore):
    """Event store backed by the SQL tables. One round trip set per query."""

    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine
        self.events_repo = EventsRepository(engine)
        self.venues_repo = VenuesRepository(engine)
        self.genres_repo = GenresRepository(engine)

    def list_events(self) -> List[EventWithRelations]:
        return self.events_repo.list_events_with_relations()

    def get_event(self, slug: str) -> Optional[EventWithRelations]:
        return self.events_repo.get_event_with_relations(slug)

    def list_venues(self) -> List[Venue]:
        return self.venues_repo.list_venues()

    def list_genres(self) -> List[Genre]:
        return self.genres_repo.list_genres()
