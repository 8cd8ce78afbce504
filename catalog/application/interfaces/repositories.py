"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from catalog.application.dtos.record import (
        RecordCreate,
        RecordResult,
        RecordUpdate,
    )


class IRecordRepository(Protocol):
    """Protocol for the durable record store (source of truth).

    Every method raises StoreUnavailableException when the store cannot
    be reached and RecordRejectedException when it refuses a write;
    "not found" is reported through the return value.
    """

    async def insert(self, draft: RecordCreate) -> RecordResult:
        """Persist a new record; id and timestamps are assigned by the store."""

    async def find_by_id(self, record_id: str) -> RecordResult | None:
        """Return the record with this id, or None."""

    async def find_all(self) -> list[RecordResult]:
        """Return every stored record."""

    async def update_by_id(self, record_id: str, changes: RecordUpdate) -> int:
        """Apply a partial update; return the number of rows affected."""

    async def delete_by_id(self, record_id: str) -> int:
        """Delete the record; return the number of rows affected."""
