from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException

from concerts.api.routers import events, health, venues
from concerts.core.config import Settings, get_settings
from concerts.core.logging import configure_logging
from concerts.core.middleware import TimingMiddleware
from concerts.domain.errors import DataIntegrityError, InvalidQueryError
from concerts.domain.store import EventStore
from concerts.infra.database import get_engine
from concerts.infra.db.sql_store import SqlEventStore
from concerts.infra.memory_store import InMemoryEventStore

logger = logging.getLogger(__name__)


def create_app(
    store: Optional[EventStore] = None,
    engine: Optional[Engine] = None,
    settings: Optional[Settings] = None,
    configure_logs: bool = True,
) -> FastAPI:
    settings = settings or get_settings()
    if store is None:
        store = _build_store(settings, engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if configure_logs:
            configure_logging(settings.log_level)
        logger.info(
            "Concert calendar API starting",
            extra={
                "environment": settings.environment,
                "store": type(store).__name__,
                "reference_timezone": settings.reference_timezone,
            },
        )
        yield
        logger.info("Concert calendar API shutting down")

    app = FastAPI(title="Concert Calendar API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.event_store = store

    app.add_middleware(TimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidQueryError)
    async def invalid_query_handler(request: Request, exc: InvalidQueryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc), "status_code": 400})

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail, "status_code": exc.status_code},
        )

    @app.exception_handler(DataIntegrityError)
    async def integrity_handler(request: Request, exc: DataIntegrityError) -> JSONResponse:
        logger.error(
            "data integrity fault",
            extra={"method": request.method, "path": request.url.path, "error": str(exc)},
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error", "status_code": 500})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled exception",
            extra={"method": request.method, "path": request.url.path, "error": str(exc)},
            exc_info=True,
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error", "status_code": 500})

    app.include_router(health.router)
    app.include_router(events.router, prefix="/api")
    app.include_router(venues.router, prefix="/api")
    return app


def _build_store(settings: Settings, engine: Optional[Engine]) -> EventStore:
    if engine is None and settings.database_url:
        engine = get_engine(settings.database_url)
    if engine is not None:
        return SqlEventStore(engine)
    return InMemoryEventStore.from_file(settings.seed_file, settings.reference_tz)


app = create_app()
