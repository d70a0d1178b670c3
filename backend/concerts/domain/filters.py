"""Event filtering.

Predicates are ANDed across dimensions; within the genre and venue
dimensions any member matches. An empty dimension matches every event.
Calendar boundaries (month, day) are evaluated in the reference timezone.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Iterable, List, Optional

from concerts.domain.errors import InvalidDateRangeError, InvalidMonthError
from concerts.domain.models import EventWithRelations

MONTH_PATTERN = re.compile(r"^([0-9]{4})-([0-9]{1,2})$")


@dataclass(frozen=True)
class MonthToken:
    year: int
    month: int

    @classmethod
    def parse(cls, token: str) -> "MonthToken":
        match = MONTH_PATTERN.match(token.strip()) if isinstance(token, str) else None
        if match is None:
            raise InvalidMonthError(str(token))
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12 or year == 0:
            raise InvalidMonthError(token)
        return cls(year=year, month=month)

    def contains(self, instant: datetime, tz: tzinfo) -> bool:
        local = instant.astimezone(tz)
        return local.year == self.year and local.month == self.month

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


def parse_slugs(raw: Optional[str]) -> frozenset[str]:
    """Split a comma-separated query value, dropping blanks."""
    if not raw:
        return frozenset()
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class EventFilter:
    month: Optional[MonthToken] = None
    genres: frozenset[str] = frozenset()
    venues: frozenset[str] = frozenset()
    search: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    def __post_init__(self):
        object.__setattr__(self, "genres", frozenset(self.genres))
        object.__setattr__(self, "venues", frozenset(self.venues))
        if self.search is not None and not self.search.strip():
            object.__setattr__(self, "search", None)
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise InvalidDateRangeError(self.date_from, self.date_to)

    @classmethod
    def from_query(
        cls,
        month: Optional[str] = None,
        genres: Optional[str] = None,
        venues: Optional[str] = None,
        search: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> "EventFilter":
        """Build a filter from raw query-string values.

        Raises:
            InvalidMonthError: ``month`` is present but not a valid YYYY-MM token.
            InvalidDateRangeError: ``date_from`` is after ``date_to``.
        """
        return cls(
            month=MonthToken.parse(month) if month else None,
            genres=parse_slugs(genres),
            venues=parse_slugs(venues),
            search=search,
            date_from=date_from,
            date_to=date_to,
        )

    @property
    def is_empty(self) -> bool:
        return (
            self.month is None
            and not self.genres
            and not self.venues
            and self.search is None
            and self.date_from is None
            and self.date_to is None
        )

    def matches(self, item: EventWithRelations, tz: tzinfo) -> bool:
        if self.month is not None and not self.month.contains(item.start_time, tz):
            return False
        if self.genres and not (item.genre_slugs & self.genres):
            return False
        if self.venues and item.venue.slug not in self.venues:
            return False
        if self.date_from or self.date_to:
            local_day = item.start_time.astimezone(tz).date()
            if self.date_from and local_day < self.date_from:
                return False
            if self.date_to and local_day > self.date_to:
                return False
        if self.search is not None and not _matches_text(item, self.search):
            return False
        return True


def _matches_text(item: EventWithRelations, query: str) -> bool:
    needle = query.strip().casefold()
    haystack = [item.event.title, item.venue.name, *(artist.name for artist in item.artists)]
    return any(needle in value.casefold() for value in haystack if value)


def filter_events(
    events: Iterable[EventWithRelations],
    event_filter: Optional[EventFilter],
    tz: tzinfo,
) -> List[EventWithRelations]:
    """Return the events matching ``event_filter``, keeping input order."""
    if event_filter is None or event_filter.is_empty:
        return list(events)
    return [item for item in events if event_filter.matches(item, tz)]
