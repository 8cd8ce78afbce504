"""Base repository: generic CRUD by primary key, one transaction per call."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.domain.exceptions import RecordRejectedException, StoreUnavailableException
from catalog.infrastructure.persistence.database import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, get_all, create, delete_by_id and an update helper.

    Each method opens its own session and commits before returning, so a
    caller that mirrors the result elsewhere only ever sees committed rows.
    Constraint violations are raised as RecordRejectedException; other
    driver and connection errors as StoreUnavailableException.

    Subclasses expose their own typed update method on top of
    _update_values.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: type[ModelType],
    ) -> None:
        self.session_factory = session_factory
        self.model = model

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Yield a session inside a transaction; commit on exit, roll back on error."""
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    yield session
        except IntegrityError as e:
            logger.warning("%s.%s rejected: %s", self.model.__name__, operation, e.orig)
            raise RecordRejectedException(operation, str(e.orig)) from e
        except (SQLAlchemyError, OSError) as e:
            logger.error(
                "%s.%s failed: %s", self.model.__name__, operation, e
            )
            raise StoreUnavailableException(operation, str(e)) from e

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        async with self._transaction("get_by_id") as session:
            result = await session.execute(select(self.model).where(model.id == entity_id))
            return result.scalar_one_or_none()

    async def get_all(self) -> list[ModelType]:
        """Return every record."""
        async with self._transaction("get_all") as session:
            result = await session.execute(select(self.model))
            return list(result.scalars().all())

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and load server-generated columns."""
        async with self._transaction("create") as session:
            session.add(obj)
            await session.flush()
            await session.refresh(obj)
            return obj

    async def _update_values(self, entity_id: str, values: dict[str, Any]) -> int:
        """Apply values to the row with this id; return rows affected.

        With no values, reports 1 if the row exists (nothing is written).
        """
        model: Any = self.model
        async with self._transaction("update_by_id") as session:
            if not values:
                found = await session.execute(
                    select(model.id).where(model.id == entity_id)
                )
                return 1 if found.scalar_one_or_none() is not None else 0
            result = await session.execute(
                update(self.model).where(model.id == entity_id).values(**values)
            )
            return result.rowcount or 0

    async def delete_by_id(self, entity_id: str) -> int:
        """Delete the row with this id; return rows affected."""
        model: Any = self.model
        async with self._transaction("delete_by_id") as session:
            result = await session.execute(
                delete(self.model).where(model.id == entity_id)
            )
            return result.rowcount or 0
