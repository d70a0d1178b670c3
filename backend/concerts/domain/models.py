from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def is_valid_slug(value: str) -> bool:
    return bool(value) and SLUG_PATTERN.match(value) is not None


def _require_slug(kind: str, slug: str) -> None:
    if not is_valid_slug(slug):
        raise ValueError(f"{kind} slug '{slug}' is not URL-safe")


class EventStatus(str, Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    PAST = "past"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Venue:
    id: str
    name: str
    slug: str
    address: str
    city: str
    capacity: Optional[int] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    website_url: Optional[str] = None

    def __post_init__(self):
        _require_slug("venue", self.slug)
        if (self.lat is None) != (self.lng is None):
            raise ValueError("venue coordinates need both lat and lng")

    @property
    def coordinates(self) -> Optional[Tuple[float, float]]:
        if self.lat is None or self.lng is None:
            return None
        return (self.lat, self.lng)


@dataclass(frozen=True)
class SocialLinks:
    spotify: Optional[str] = None
    instagram: Optional[str] = None
    website: Optional[str] = None


@dataclass(frozen=True)
class Artist:
    id: str
    name: str
    slug: str
    spotify_id: Optional[str] = None
    image_url: Optional[str] = None
    bio: Optional[str] = None
    spotify_listeners: Optional[int] = None
    social_links: SocialLinks = field(default_factory=SocialLinks)

    def __post_init__(self):
        _require_slug("artist", self.slug)


@dataclass(frozen=True)
class Genre:
    id: str
    name: str
    slug: str
    color: Optional[str] = None

    def __post_init__(self):
        _require_slug("genre", self.slug)


@dataclass(frozen=True)
class Event:
    """A concert at one venue.

    ``artist_ids`` is in lineup order. ``cancelled`` is the only stored part
    of the status; the rest is derived from the time span, see ``status``.
    """

    id: str
    slug: str
    title: str
    start_time: datetime
    end_time: datetime
    venue_id: str
    artist_ids: Tuple[str, ...] = ()
    genre_ids: Tuple[str, ...] = ()
    description: Optional[str] = None
    cancelled: bool = False
    ticket_url: Optional[str] = None
    image_url: Optional[str] = None
    price: Optional[str] = None
    spotify_listeners: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        _require_slug("event", self.slug)
        if self.start_time.tzinfo is None or self.end_time.tzinfo is None:
            raise ValueError("event start_time and end_time must be timezone-aware")
        if self.start_time >= self.end_time:
            raise ValueError("event start_time must be before end_time")
        object.__setattr__(self, "artist_ids", tuple(self.artist_ids))
        object.__setattr__(self, "genre_ids", tuple(self.genre_ids))

    def status(self, now: datetime) -> EventStatus:
        if self.cancelled:
            return EventStatus.CANCELLED
        if now < self.start_time:
            return EventStatus.UPCOMING
        if now < self.end_time:
            return EventStatus.ONGOING
        return EventStatus.PAST


@dataclass(frozen=True)
class EventWithRelations:
    event: Event
    venue: Venue
    artists: Tuple[Artist, ...] = ()
    genres: Tuple[Genre, ...] = ()

    def __post_init__(self):
        if self.venue.id != self.event.venue_id:
            raise ValueError("venue does not match event.venue_id")
        object.__setattr__(self, "artists", tuple(self.artists))
        object.__setattr__(self, "genres", tuple(self.genres))

    @property
    def slug(self) -> str:
        return self.event.slug

    @property
    def start_time(self) -> datetime:
        return self.event.start_time

    @property
    def genre_slugs(self) -> frozenset[str]:
        return frozenset(genre.slug for genre in self.genres)

    def status(self, now: datetime) -> EventStatus:
        return self.event.status(now)
