from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import Table, insert, select, update
from sqlalchemy.engine import Connection


def upsert_by_slug(conn: Connection, table: Table, record: Dict[str, Any]) -> int:
    """Insert ``record`` or update the row sharing its slug. Returns the row id."""
    now = datetime.now(timezone.utc)
    existing_id = conn.execute(
        select(table.c.id).where(table.c.slug == record["slug"])
    ).scalar_one_or_none()
    if existing_id is not None:
        conn.execute(update(table).where(table.c.id == existing_id).values(**record, updated_at=now))
        return existing_id
    result = conn.execute(insert(table).values(**record, created_at=now, updated_at=now))
    return result.inserted_primary_key[0]


def slug_id_map(conn: Connection, table: Table) -> Dict[str, int]:
    rows = conn.execute(select(table.c.slug, table.c.id)).all()
    return {slug: row_id for slug, row_id in rows}
