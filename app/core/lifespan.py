"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of the search service, telemetry and the DB engine.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: SearchService on app.state (unless one was injected), SQLAlchemy
    instrumentation when telemetry is on. The index itself is built lazily
    by the first search or readiness probe. Shutdown: telemetry flush, SQL
    engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    if getattr(app.state, "search_service", None) is None:
        from app.api.v1.dependencies import create_search_service

        app.state.search_service = create_search_service(settings=settings)
        logger.info(
            "Search service ready (index TTL %ss, built on first use)",
            settings.search_index_ttl_seconds,
        )

    from app.shared.telemetry.telemetry import get_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None and settings.database_url:
        from app.infrastructure.persistence.database import get_engine

        telemetry_instance.instrument_sqlalchemy(get_engine())

    yield

    # ---- Shutdown ----
    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        logger.info("Telemetry shutdown complete")

    from app.infrastructure.persistence import database

    if database.engine is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
