"""Resource lifecycle: startup and shutdown of the coordinator's collaborators.

Single place for wiring (no business logic): Redis cache, SQLAlchemy
session factory, telemetry. Used by scripts and by any outer layer that
needs a ready CatalogCacheCoordinator.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from catalog.core.config import Settings, get_settings
from catalog.infrastructure.cache.redis_cache import CacheService
from catalog.infrastructure.persistence import database
from catalog.infrastructure.persistence.repositories.record_repo import RecordRepository
from catalog.infrastructure.services.catalog_cache_coordinator import (
    CatalogCacheCoordinator,
)
from catalog.shared.telemetry.telemetry import TelemetryConfig

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_coordinator(
    settings: Settings | None = None,
) -> AsyncIterator[CatalogCacheCoordinator]:
    """Connect the cache and store, yield a coordinator, then release everything.

    Startup order: telemetry (if enabled), Redis cache, session factory.
    Shutdown order: cache disconnect, telemetry shutdown, engine dispose.
    Shutdown runs even when the body or the session factory raises.

    Raises:
        SqlNotConfiguredException: DATABASE_URL is not set.
    """
    settings = settings or get_settings()

    # ---- Startup ----
    telemetry: TelemetryConfig | None = None
    if settings.telemetry_enabled:
        telemetry = TelemetryConfig.from_settings(settings)
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument_clients()

    cache = CacheService(settings=settings)
    await cache.connect()
    try:
        session_factory = database.get_session_factory()
        if telemetry is not None and database.engine is not None:
            telemetry.instrument_sqlalchemy(database.engine)

        yield CatalogCacheCoordinator(
            RecordRepository(session_factory),
            cache,
            ttl=settings.cache_ttl_records,
        )
    finally:
        # ---- Shutdown ----
        await cache.disconnect()
        if telemetry is not None:
            telemetry.shutdown()
        await database.dispose_engine()
