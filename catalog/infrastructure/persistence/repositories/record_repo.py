"""Catalog record repository (durable store). Returns application DTOs."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.application.dtos.record import RecordCreate, RecordResult, RecordUpdate
from catalog.infrastructure.persistence.models.record import CatalogRecord
from catalog.infrastructure.persistence.repositories.base import BaseRepository
from catalog.shared.utils.datetime import ensure_utc


def _record_to_result(r: CatalogRecord) -> RecordResult:
    """Map ORM CatalogRecord to application RecordResult."""
    return RecordResult(
        id=r.id,
        name=r.name,
        price=r.price,
        description=r.description,
        category=r.category,
        image=r.image,
        created_at=ensure_utc(r.created_at),
        updated_at=ensure_utc(r.updated_at),
    )


class RecordRepository(BaseRepository[CatalogRecord]):
    """Durable store for catalog records (implements IRecordRepository)."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory, CatalogRecord)

    async def insert(self, draft: RecordCreate) -> RecordResult:
        record = CatalogRecord(
            name=draft.name,
            price=draft.price,
            description=draft.description,
            category=draft.category,
            image=draft.image,
        )
        created = await self.create(record)
        return _record_to_result(created)

    async def find_by_id(self, record_id: str) -> RecordResult | None:
        record = await self.get_by_id(record_id)
        return _record_to_result(record) if record else None

    async def find_all(self) -> list[RecordResult]:
        return [_record_to_result(r) for r in await self.get_all()]

    async def update_by_id(self, record_id: str, changes: RecordUpdate) -> int:
        """Apply only the fields set on changes; return rows affected."""
        return await self._update_values(record_id, changes.values())
