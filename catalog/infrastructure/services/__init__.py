"""Infrastructure services built on the cache and persistence adapters."""

from catalog.infrastructure.services.catalog_cache_coordinator import (
    CatalogCacheCoordinator,
)

__all__ = ["CatalogCacheCoordinator"]
