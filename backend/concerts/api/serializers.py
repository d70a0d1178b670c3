from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any, Dict

from concerts.domain.models import Artist, EventWithRelations, Genre, Venue


def serialize_venue(venue: Venue) -> Dict[str, Any]:
    coordinates = venue.coordinates
    return {
        "id": venue.id,
        "name": venue.name,
        "slug": venue.slug,
        "address": venue.address,
        "city": venue.city,
        "capacity": venue.capacity,
        "coordinates": {"lat": coordinates[0], "lng": coordinates[1]} if coordinates else None,
        "website_url": venue.website_url,
    }


def serialize_artist(artist: Artist) -> Dict[str, Any]:
    links = artist.social_links
    return {
        "id": artist.id,
        "name": artist.name,
        "slug": artist.slug,
        "spotify_id": artist.spotify_id,
        "image_url": artist.image_url,
        "bio": artist.bio,
        "spotify_listeners": artist.spotify_listeners,
        "social_links": {
            "spotify": links.spotify,
            "instagram": links.instagram,
            "website": links.website,
        },
    }


def serialize_genre(genre: Genre) -> Dict[str, Any]:
    return {"id": genre.id, "name": genre.name, "slug": genre.slug, "color": genre.color}


def serialize_event(item: EventWithRelations, tz: tzinfo, now: datetime) -> Dict[str, Any]:
    """Event with venue, lineup and genres. Datetimes are rendered in ``tz``."""
    event = item.event
    return {
        "id": event.id,
        "slug": event.slug,
        "title": event.title,
        "description": event.description,
        "start_time": _to_iso(event.start_time, tz),
        "end_time": _to_iso(event.end_time, tz),
        "status": event.status(now).value,
        "venue_id": event.venue_id,
        "artist_ids": list(event.artist_ids),
        "genre_ids": list(event.genre_ids),
        "ticket_url": event.ticket_url,
        "image_url": event.image_url,
        "price": event.price,
        "spotify_listeners": event.spotify_listeners,
        "created_at": _to_iso(event.created_at, tz),
        "updated_at": _to_iso(event.updated_at, tz),
        "venue": serialize_venue(item.venue),
        "artists": [serialize_artist(artist) for artist in item.artists],
        "genres": [serialize_genre(genre) for genre in item.genres],
    }


def _to_iso(dt, tz: tzinfo):
    return dt.astimezone(tz).isoformat() if dt else None
