from __future__ import annotations

from typing import Any, Dict

from sqlalchemy.engine import Engine

from .common import slug_id_map, upsert_by_slug
from .tables import artists_table

UPSERT_COLUMNS = [
    "slug",
    "name",
    "spotify_id",
    "image_url",
    "bio",
    "spotify_listeners",
    "spotify_url",
    "instagram_url",
    "website_url",
]


class ArtistsRepository:
    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def upsert_artist(self, artist: Dict[str, Any]) -> int:
        record = {col: artist.get(col) for col in UPSERT_COLUMNS}
        with self.engine.begin() as conn:
            return upsert_by_slug(conn, artists_table, record)

    def ids_by_slug(self) -> Dict[str, int]:
        with self.engine.begin() as conn:
            return slug_id_map(conn, artists_table)
