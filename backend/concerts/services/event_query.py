from __future__ import annotations

import logging
from datetime import tzinfo
from typing import List, Optional
from zoneinfo import ZoneInfo

from concerts.core.config import DEFAULT_TIMEZONE
from concerts.domain.filters import EventFilter, filter_events
from concerts.domain.models import EventWithRelations, Genre, Venue
from concerts.domain.store import EventStore

logger = logging.getLogger(__name__)


class EventQueryService:
    """Read-only queries over an event store.

    Never mutates the store; identical inputs over an unchanged store give
    identical results.
    """

    def __init__(self, store: EventStore, reference_tz: tzinfo | str = DEFAULT_TIMEZONE):
        if store is None:
            raise ValueError("store is required")
        self.store = store
        self.reference_tz = ZoneInfo(reference_tz) if isinstance(reference_tz, str) else reference_tz

    def list_events(self, event_filter: Optional[EventFilter] = None) -> List[EventWithRelations]:
        events = self.store.list_events()
        result = filter_events(events, event_filter, self.reference_tz)
        logger.debug(
            "events listed",
            extra={"total": len(events), "matched": len(result), "filter": repr(event_filter)},
        )
        return result

    def get_by_slug(self, slug: str) -> Optional[EventWithRelations]:
        return self.store.get_event(slug)

    def list_venues(self) -> List[Venue]:
        return self.store.list_venues()

    def list_genres(self) -> List[Genre]:
        return self.store.list_genres()
