from __future__ import annotations

from fastapi import APIRouter, Depends

from concerts.api.deps import get_query_service
from concerts.api.serializers import serialize_genre, serialize_venue
from concerts.services.event_query import EventQueryService

router = APIRouter(tags=["catalog"])


@router.get("/venues")
def list_venues(service: EventQueryService = Depends(get_query_service)):
    return [serialize_venue(venue) for venue in service.list_venues()]


@router.get("/genres")
def list_genres(service: EventQueryService = Depends(get_query_service)):
    return [serialize_genre(genre) for genre in service.list_genres()]
