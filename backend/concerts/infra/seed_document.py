"""Reading the JSON seed document.

The document has four top-level lists: ``genres``, ``artists``, ``venues``
and ``events``. Events point at their venue, artists (lineup order) and
genres by slug. The payload helpers normalise a record into the column
layout shared by the database tables and the in-memory store.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from concerts.core.config import DEFAULT_SEED_FILE
from concerts.domain.models import is_valid_slug


@dataclass(frozen=True)
class EventRefs:
    venue: str
    artists: Tuple[str, ...]
    genres: Tuple[str, ...]


def load_seed_document(path: str | Path | None = None) -> Dict[str, Any]:
    seed_path = Path(path) if path is not None else DEFAULT_SEED_FILE
    if not seed_path.exists():
        raise FileNotFoundError(f"Seed file not found: {seed_path}")
    with seed_path.open(encoding="utf-8") as handle:
        document = json.load(handle)
    if not isinstance(document, dict):
        raise ValueError(f"Seed file {seed_path} must contain a JSON object")
    return document


def genre_payload(record: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "slug": _slug(record),
        "name": _required(record, "name"),
        "color": record.get("color"),
    }


def artist_payload(record: Dict[str, Any]) -> Dict[str, Any]:
    links = record.get("social_links") or {}
    return {
        "slug": _slug(record),
        "name": _required(record, "name"),
        "spotify_id": record.get("spotify_id"),
        "image_url": record.get("image_url"),
        "bio": record.get("bio"),
        "spotify_listeners": _optional_int(record.get("spotify_listeners")),
        "spotify_url": links.get("spotify"),
        "instagram_url": links.get("instagram"),
        "website_url": links.get("website"),
    }


def venue_payload(record: Dict[str, Any]) -> Dict[str, Any]:
    coordinates = record.get("coordinates") or {}
    if (coordinates.get("lat") is None) != (coordinates.get("lng") is None):
        raise ValueError(f"venue '{record.get('slug')}' needs both lat and lng or neither")
    return {
        "slug": _slug(record),
        "name": _required(record, "name"),
        "address": _required(record, "address"),
        "city": _required(record, "city"),
        "capacity": _optional_int(record.get("capacity")),
        "lat": _optional_float(coordinates.get("lat")),
        "lng": _optional_float(coordinates.get("lng")),
        "website_url": record.get("website_url"),
    }


def event_payload(record: Dict[str, Any], tz: tzinfo) -> Tuple[Dict[str, Any], EventRefs]:
    """Normalise an event record.

    Naive timestamps are read as wall-clock time in ``tz``.

    Raises:
        ValueError: missing fields, bad slug, unparsable or inverted time span.
    """
    start_time = parse_datetime(_required(record, "start_time"), tz)
    end_time = parse_datetime(_required(record, "end_time"), tz)
    if start_time >= end_time:
        raise ValueError(f"event '{record.get('slug')}' ends before it starts")
    refs = EventRefs(
        venue=_required(record, "venue"),
        artists=tuple(record.get("artists") or ()),
        genres=tuple(record.get("genres") or ()),
    )
    payload = {
        "slug": _slug(record),
        "title": _required(record, "title"),
        "description": record.get("description"),
        "start_time": start_time,
        "end_time": end_time,
        "is_cancelled": bool(record.get("cancelled", False)),
        "ticket_url": record.get("ticket_url"),
        "image_url": record.get("image_url"),
        "price": record.get("price"),
        "spotify_listeners": _optional_int(record.get("spotify_listeners")),
    }
    return payload, refs


def parse_datetime(value: str, tz: tzinfo) -> datetime:
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    return dt


def _slug(record: Dict[str, Any]) -> str:
    slug = _required(record, "slug")
    if not is_valid_slug(slug):
        raise ValueError(f"slug '{slug}' is not URL-safe")
    return slug


def _required(record: Dict[str, Any], key: str) -> Any:
    value = record.get(key)
    if value is None or value == "":
        raise ValueError(f"missing required field '{key}'")
    return value


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def _optional_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None
