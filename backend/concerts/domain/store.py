"""Store interface (repository pattern).

Stores are read-only from the query side and return domain models with
relations resolved. Implementations must be swappable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from concerts.domain.models import EventWithRelations, Genre, Venue


class EventStore(ABC):
    @abstractmethod
    def list_events(self) -> List[EventWithRelations]:
        """Return every event with venue, lineup and genres, in store order."""
        ...

    @abstractmethod
    def get_event(self, slug: str) -> Optional[EventWithRelations]:
        """Return the event with this slug, or None if there is none."""
        ...

    @abstractmethod
    def list_venues(self) -> List[Venue]:
        ...

    @abstractmethod
    def list_genres(self) -> List[Genre]:
        ...
