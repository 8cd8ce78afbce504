"""Domain layer: catalog failure taxonomy."""

from catalog.domain.exceptions import (
    CacheUnavailableException,
    CatalogException,
    RecordNotFoundException,
    RecordRejectedException,
    SqlNotConfiguredException,
    StoreUnavailableException,
)

__all__ = [
    "CacheUnavailableException",
    "CatalogException",
    "RecordNotFoundException",
    "RecordRejectedException",
    "SqlNotConfiguredException",
    "StoreUnavailableException",
]
