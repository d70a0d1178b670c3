from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer

from concerts.core.config import get_settings
from concerts.domain.errors import InvalidQueryError
from concerts.domain.filters import EventFilter
from concerts.domain.models import EventWithRelations
from concerts.infra.database import get_engine
from concerts.infra.db.sql_store import SqlEventStore
from concerts.infra.memory_store import InMemoryEventStore
from concerts.jobs.seed_data import seed_database
from concerts.services.event_query import EventQueryService

app = typer.Typer(help="Concert calendar from the command line")


def _build_service(database_url: Optional[str], seed_file: Optional[Path]) -> EventQueryService:
    settings = get_settings()
    database_url = database_url or settings.database_url
    if database_url:
        store = SqlEventStore(get_engine(database_url))
    else:
        store = InMemoryEventStore.from_file(seed_file or settings.seed_file, settings.reference_tz)
    return EventQueryService(store, reference_tz=settings.reference_tz)


def _event_line(item: EventWithRelations, service: EventQueryService, now: datetime) -> str:
    start = item.start_time.astimezone(service.reference_tz)
    genres = ",".join(genre.slug for genre in item.genres)
    return (
        f"{start:%Y-%m-%d %H:%M}\t{item.slug}\t{item.event.title}\t"
        f"{item.venue.name}\t{genres}\t{item.status(now).value}"
    )


@app.command("events")
def cli_events(
    month: Optional[str] = typer.Option(None, help="Month YYYY-MM"),
    genres: Optional[str] = typer.Option(None, help="Genre slugs, comma-separated"),
    venues: Optional[str] = typer.Option(None, help="Venue slugs, comma-separated"),
    search: Optional[str] = typer.Option(None, help="Text in title, artist or venue"),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Read from this database instead of the seed file"),
    seed_file: Optional[Path] = typer.Option(None, "--seed-file", help="Seed JSON file"),
):
    try:
        event_filter = EventFilter.from_query(month=month, genres=genres, venues=venues, search=search)
    except InvalidQueryError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2)
    service = _build_service(database_url, seed_file)
    events = service.list_events(event_filter)
    if not events:
        typer.echo("No events match")
        raise typer.Exit(code=0)
    now = datetime.now(timezone.utc)
    for item in events:
        typer.echo(_event_line(item, service, now))


@app.command("event")
def cli_event(
    slug: str = typer.Argument(..., help="Event slug"),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Read from this database instead of the seed file"),
    seed_file: Optional[Path] = typer.Option(None, "--seed-file", help="Seed JSON file"),
):
    service = _build_service(database_url, seed_file)
    item = service.get_by_slug(slug)
    if item is None:
        typer.echo(f"Event '{slug}' not found", err=True)
        raise typer.Exit(code=1)
    tz = service.reference_tz
    start = item.start_time.astimezone(tz)
    end = item.event.end_time.astimezone(tz)
    venue = item.venue
    typer.echo(item.event.title)
    typer.echo(f"{start:%Y-%m-%d %H:%M} - {end:%H:%M}")
    typer.echo(f"{venue.name}, {venue.address}, {venue.city}")
    if item.artists:
        typer.echo("Lineup: " + ", ".join(artist.name for artist in item.artists))
    if item.genres:
        typer.echo("Genres: " + ", ".join(genre.name for genre in item.genres))
    typer.echo(f"Status: {item.status(datetime.now(timezone.utc)).value}")
    if item.event.price:
        typer.echo(f"Price: {item.event.price}")
    if item.event.ticket_url:
        typer.echo(f"Tickets: {item.event.ticket_url}")


@app.command("venues")
def cli_venues(
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Read from this database instead of the seed file"),
    seed_file: Optional[Path] = typer.Option(None, "--seed-file", help="Seed JSON file"),
):
    service = _build_service(database_url, seed_file)
    for venue in service.list_venues():
        capacity = venue.capacity if venue.capacity is not None else "-"
        typer.echo(f"{venue.slug}\t{venue.name}\t{venue.city}\t{capacity}")


@app.command("seed")
def cli_seed(
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Target database (defaults to DATABASE_URL)"),
    seed_file: Optional[Path] = typer.Option(None, "--seed-file", help="Seed JSON file"),
):
    try:
        stats = seed_database(seed_file, database_url=database_url)
    except RuntimeError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(" ".join(f"{key}={value}" for key, value in stats.items()))


if __name__ == "__main__":
    app()
