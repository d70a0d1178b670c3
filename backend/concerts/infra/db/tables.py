from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    Table,
    Text,
)

metadata = MetaData()

venues_table = Table(
    "venues",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("slug", Text, nullable=False, unique=True),
    Column("name", Text, nullable=False),
    Column("address", Text, nullable=False),
    Column("city", Text, nullable=False),
    Column("capacity", Integer),
    Column("lat", Float),
    Column("lng", Float),
    Column("website_url", Text),
    Column("created_at", DateTime(timezone=True)),
    Column("updated_at", DateTime(timezone=True)),
)

artists_table = Table(
    "artists",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("slug", Text, nullable=False, unique=True),
    Column("name", Text, nullable=False),
    Column("spotify_id", Text),
    Column("image_url", Text),
    Column("bio", Text),
    Column("spotify_listeners", Integer),
    Column("spotify_url", Text),
    Column("instagram_url", Text),
    Column("website_url", Text),
    Column("created_at", DateTime(timezone=True)),
    Column("updated_at", DateTime(timezone=True)),
)

genres_table = Table(
    "genres",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("slug", Text, nullable=False, unique=True),
    Column("name", Text, nullable=False),
    Column("color", Text),
    Column("created_at", DateTime(timezone=True)),
    Column("updated_at", DateTime(timezone=True)),
)

events_table = Table(
    "events",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("slug", Text, nullable=False, unique=True),
    Column("title", Text, nullable=False),
    Column("description", Text),
    Column("start_time", DateTime(timezone=True), nullable=False),
    Column("end_time", DateTime(timezone=True), nullable=False),
    # RESTRICT: a venue with events cannot be deleted.
    Column("venue_id", Integer, ForeignKey("venues.id", ondelete="RESTRICT"), nullable=False),
    Column("is_cancelled", Boolean, nullable=False, default=False),
    Column("ticket_url", Text),
    Column("image_url", Text),
    Column("price", Text),
    Column("spotify_listeners", Integer),
    Column("created_at", DateTime(timezone=True)),
    Column("updated_at", DateTime(timezone=True)),
)

event_artists_table = Table(
    "event_artists",
    metadata,
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
    Column("artist_id", Integer, ForeignKey("artists.id", ondelete="RESTRICT"), nullable=False),
    Column("position", Integer, nullable=False),
    PrimaryKeyConstraint("event_id", "artist_id"),
)

event_genres_table = Table(
    "event_genres",
    metadata,
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
    Column("genre_id", Integer, ForeignKey("genres.id", ondelete="RESTRICT"), nullable=False),
    PrimaryKeyConstraint("event_id", "genre_id"),
)
