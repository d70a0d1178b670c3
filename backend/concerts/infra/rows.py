"""Row (mapping) to domain model conversion shared by the stores."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from concerts.domain.models import Artist, Event, Genre, SocialLinks, Venue


def as_utc(dt: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops tzinfo; stored values are UTC.
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def venue_from_row(row: Mapping[str, Any]) -> Venue:
    return Venue(
        id=str(row["id"]),
        name=row["name"],
        slug=row["slug"],
        address=row["address"],
        city=row["city"],
        capacity=row.get("capacity"),
        lat=row.get("lat"),
        lng=row.get("lng"),
        website_url=row.get("website_url"),
    )


def artist_from_row(row: Mapping[str, Any]) -> Artist:
    return Artist(
        id=str(row["id"]),
        name=row["name"],
        slug=row["slug"],
        spotify_id=row.get("spotify_id"),
        image_url=row.get("image_url"),
        bio=row.get("bio"),
        spotify_listeners=row.get("spotify_listeners"),
        social_links=SocialLinks(
            spotify=row.get("spotify_url"),
            instagram=row.get("instagram_url"),
            website=row.get("website_url"),
        ),
    )


def genre_from_row(row: Mapping[str, Any]) -> Genre:
    return Genre(id=str(row["id"]), name=row["name"], slug=row["slug"], color=row.get("color"))


def event_from_row(
    row: Mapping[str, Any],
    artist_ids: Iterable[Any] = (),
    genre_ids: Iterable[Any] = (),
) -> Event:
    return Event(
        id=str(row["id"]),
        slug=row["slug"],
        title=row["title"],
        start_time=as_utc(row["start_time"]),
        end_time=as_utc(row["end_time"]),
        venue_id=str(row["venue_id"]),
        artist_ids=tuple(str(artist_id) for artist_id in artist_ids),
        genre_ids=tuple(str(genre_id) for genre_id in genre_ids),
        description=row.get("description"),
        cancelled=bool(row.get("is_cancelled")),
        ticket_url=row.get("ticket_url"),
        image_url=row.get("image_url"),
        price=row.get("price"),
        spotify_listeners=row.get("spotify_listeners"),
        created_at=as_utc(row.get("created_at")),
        updated_at=as_utc(row.get("updated_at")),
    )
