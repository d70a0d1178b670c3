from __future__ import annotations

from datetime import datetime, timezone

from fastapi import Depends, HTTPException, Request

from concerts.core.config import Settings
from concerts.domain.store import EventStore
from concerts.services.event_query import EventQueryService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_event_store(request: Request) -> EventStore:
    store = getattr(request.app.state, "event_store", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Event store not configured")
    return store


def get_query_service(
    store: EventStore = Depends(get_event_store),
    settings: Settings = Depends(get_app_settings),
) -> EventQueryService:
    return EventQueryService(store, reference_tz=settings.reference_tz)


def get_now() -> datetime:
    return datetime.now(timezone.utc)
