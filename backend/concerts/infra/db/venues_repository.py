from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.engine import Engine

from concerts.domain.models import Venue
from concerts.infra.rows import venue_from_row

from .common import slug_id_map, upsert_by_slug
from .tables import venues_table

UPSERT_COLUMNS = [
    "slug",
    "name",
    "address",
    "city",
    "capacity",
    "lat",
    "lng",
    "website_url",
]


class VenuesRepository:
    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def upsert_venue(self, venue: Dict[str, Any]) -> int:
        record = {col: venue.get(col) for col in UPSERT_COLUMNS}
        with self.engine.begin() as conn:
            return upsert_by_slug(conn, venues_table, record)

    def list_venues(self) -> List[Venue]:
        with self.engine.begin() as conn:
            rows = conn.execute(select(venues_table).order_by(venues_table.c.id)).mappings().all()
        return [venue_from_row(row) for row in rows]

    def ids_by_slug(self) -> Dict[str, int]:
        with self.engine.begin() as conn:
            return slug_id_map(conn, venues_table)
