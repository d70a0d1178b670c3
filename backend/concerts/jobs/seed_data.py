"""Load the JSON seed document into the database.

This is the only writer of catalog data. Records that break an invariant
(bad slug, inverted time span, reference to an unknown venue, artist or
genre) are skipped and logged as warnings; everything else is upserted by
slug, so the job can be re-run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional
from zoneinfo import ZoneInfo

import typer
from sqlalchemy.engine import Engine

from concerts.core.config import get_settings
from concerts.core.logging import configure_logging
from concerts.infra.database import get_engine
from concerts.infra.db.artists_repository import ArtistsRepository
from concerts.infra.db.events_repository import EventsRepository
from concerts.infra.db.genres_repository import GenresRepository
from concerts.infra.db.tables import metadata
from concerts.infra.db.venues_repository import VenuesRepository
from concerts.infra.seed_document import (
    artist_payload,
    event_payload,
    genre_payload,
    load_seed_document,
    venue_payload,
)

logger = logging.getLogger(__name__)

app = typer.Typer(help="Load the concert seed document into the database")


def seed_database(
    seed_file: str | Path | None = None,
    *,
    engine: Optional[Engine] = None,
    database_url: Optional[str] = None,
    timezone_name: Optional[str] = None,
) -> Dict[str, int]:
    settings = get_settings()
    if engine is None:
        engine = get_engine(database_url)
    metadata.create_all(engine)
    document = load_seed_document(seed_file or settings.seed_file)
    tz = ZoneInfo(timezone_name or settings.reference_timezone)

    stats = {"genres": 0, "artists": 0, "venues": 0, "events": 0, "skipped": 0}
    genres_repo = GenresRepository(engine)
    artists_repo = ArtistsRepository(engine)
    venues_repo = VenuesRepository(engine)
    events_repo = EventsRepository(engine)

    for kind, payload_fn, upsert in (
        ("genres", genre_payload, genres_repo.upsert_genre),
        ("artists", artist_payload, artists_repo.upsert_artist),
        ("venues", venue_payload, venues_repo.upsert_venue),
    ):
        for record in document.get(kind) or []:
            try:
                payload = payload_fn(record)
            except (ValueError, TypeError) as exc:
                logger.warning("skipping invalid record", extra={"kind": kind, "record": record.get("slug"), "error": str(exc)})
                stats["skipped"] += 1
                continue
            upsert(payload)
            stats[kind] += 1

    genre_ids = genres_repo.ids_by_slug()
    artist_ids = artists_repo.ids_by_slug()
    venue_ids = venues_repo.ids_by_slug()

    for record in document.get("events") or []:
        try:
            payload, refs = event_payload(record, tz)
        except (ValueError, TypeError) as exc:
            logger.warning("skipping invalid event", extra={"event": record.get("slug"), "error": str(exc)})
            stats["skipped"] += 1
            continue
        missing = [f"venue:{refs.venue}"] if refs.venue not in venue_ids else []
        missing += [f"artist:{slug}" for slug in refs.artists if slug not in artist_ids]
        missing += [f"genre:{slug}" for slug in refs.genres if slug not in genre_ids]
        if missing:
            logger.warning("skipping event with dangling references", extra={"event": payload["slug"], "missing": missing})
            stats["skipped"] += 1
            continue
        payload["venue_id"] = venue_ids[refs.venue]
        events_repo.upsert_event(
            payload,
            artist_ids=[artist_ids[slug] for slug in refs.artists],
            genre_ids=[genre_ids[slug] for slug in refs.genres],
        )
        stats["events"] += 1

    logger.info("seed complete", extra={"database": str(engine.url), **stats})
    return stats


@app.command()
def cli(
    seed_file: Optional[Path] = typer.Option(None, help="Seed JSON file (defaults to the bundled data)"),
    database_url: Optional[str] = typer.Option(None, help="Database URL (defaults to DATABASE_URL)"),
):
    configure_logging(get_settings().log_level)
    stats = seed_database(seed_file, database_url=database_url)
    typer.echo(" ".join(f"{key}={value}" for key, value in stats.items()))


if __name__ == "__main__":
    app()
