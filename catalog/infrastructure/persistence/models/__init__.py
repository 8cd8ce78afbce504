"""Persistence models: ORM entities and mixins."""

from catalog.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from catalog.infrastructure.persistence.models.record import CatalogRecord

__all__ = [
    "CatalogRecord",
    "CuidMixin",
    "TimestampMixin",
]
