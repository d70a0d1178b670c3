from __future__ import annotations

from datetime import date as date_type, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from concerts.api.deps import get_now, get_query_service
from concerts.api.serializers import serialize_event
from concerts.domain.filters import EventFilter
from concerts.services.event_query import EventQueryService

router = APIRouter(tags=["events"])


@router.get("/events")
def list_events(
    month: Optional[str] = Query(None, description="Calendar month, YYYY-MM"),
    genres: Optional[str] = Query(None, description="Comma-separated genre slugs"),
    venues: Optional[str] = Query(None, description="Comma-separated venue slugs"),
    search: Optional[str] = Query(None, description="Text in title, artist or venue name"),
    date_from: Optional[date_type] = Query(None, alias="from"),
    date_to: Optional[date_type] = Query(None, alias="to"),
    service: EventQueryService = Depends(get_query_service),
    now: datetime = Depends(get_now),
):
    # InvalidQueryError raised here is turned into a 400 by the app handler.
    event_filter = EventFilter.from_query(
        month=month,
        genres=genres,
        venues=venues,
        search=search,
        date_from=date_from,
        date_to=date_to,
    )
    events = service.list_events(event_filter)
    return [serialize_event(item, service.reference_tz, now) for item in events]


@router.get("/events/{slug}")
def get_event(
    slug: str,
    service: EventQueryService = Depends(get_query_service),
    now: datetime = Depends(get_now),
):
    item = service.get_by_slug(slug)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Event '{slug}' not found")
    return serialize_event(item, service.reference_tz, now)
