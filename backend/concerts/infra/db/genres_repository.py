from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.engine import Engine

from concerts.domain.models import Genre
from concerts.infra.rows import genre_from_row

from .common import slug_id_map, upsert_by_slug
from .tables import genres_table


class GenresRepository:
    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def upsert_genre(self, genre: Dict[str, Any]) -> int:
        record = {col: genre.get(col) for col in ("slug", "name", "color")}
        with self.engine.begin() as conn:
            return upsert_by_slug(conn, genres_table, record)

    def list_genres(self) -> List[Genre]:
        with self.engine.begin() as conn:
            rows = conn.execute(select(genres_table).order_by(genres_table.c.id)).mappings().all()
        return [genre_from_row(row) for row in rows]

    def ids_by_slug(self) -> Dict[str, int]:
        with self.engine.begin() as conn:
            return slug_id_map(conn, genres_table)
