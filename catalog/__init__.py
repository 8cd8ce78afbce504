"""Catalog record store with a cache-aside Redis layer over an async SQL store.

Entry point for callers is CatalogCacheCoordinator (see
catalog.core.resources.open_coordinator for ready-made wiring).
"""

from catalog.application.dtos.record import RecordCreate, RecordResult, RecordUpdate
from catalog.infrastructure.services.catalog_cache_coordinator import (
    CatalogCacheCoordinator,
)

__all__ = [
    "CatalogCacheCoordinator",
    "RecordCreate",
    "RecordResult",
    "RecordUpdate",
]
