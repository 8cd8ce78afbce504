"""DTOs for catalog record use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class RecordCreate:
    """Draft of a new record; id and timestamps are assigned by the store."""

    name: str
    price: Decimal
    description: str
    category: str
    image: str | None = None


@dataclass(frozen=True)
class RecordUpdate:
    """Partial update. Fields left as None are not touched.

    Set clear_image to remove the image reference (image=None alone
    means "leave unchanged").
    """

    name: str | None = None
    price: Decimal | None = None
    description: str | None = None
    category: str | None = None
    image: str | None = None
    clear_image: bool = False

    def values(self) -> dict[str, Any]:
        """Return the column values to apply, keyed by field name."""
        changes: dict[str, Any] = {
            key: value
            for key, value in (
                ("name", self.name),
                ("price", self.price),
                ("description", self.description),
                ("category", self.category),
                ("image", self.image),
            )
            if value is not None
        }
        if self.clear_image:
            changes["image"] = None
        return changes


@dataclass(frozen=True)
class RecordResult:
    """Record read-model (result of insert, find_by_id, find_all and cache reads)."""

    id: str
    name: str
    price: Decimal
    description: str
    category: str
    image: str | None
    created_at: datetime
    updated_at: datetime
