"""Pytest configuration and fixtures for the catalog.

Coordinator tests run against in-memory fakes of the durable store and the
cache (both can be switched "down"). Repository tests need Postgres and
are marked requires_db; run without DB via: pytest -m 'not requires_db'.
"""

import uuid
from dataclasses import replace
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.application.dtos.record import RecordCreate, RecordResult, RecordUpdate
from catalog.core.constants import DEFAULT_RECORD_TTL
from catalog.domain.exceptions import (
    CacheUnavailableException,
    SqlNotConfiguredException,
    StoreUnavailableException,
)
from catalog.infrastructure.persistence import database
from catalog.infrastructure.services.catalog_cache_coordinator import (
    CatalogCacheCoordinator,
)
from catalog.shared.utils.datetime import utc_now


class FakeRecordStore:
    """In-memory IRecordRepository. Set available=False to simulate an outage."""

    def __init__(self) -> None:
        self.rows: dict[str, RecordResult] = {}
        self.available = True
        self.calls: list[str] = []

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if not self.available:
            raise StoreUnavailableException(operation, "store is down")

    def seed(self, *drafts: RecordCreate) -> list[RecordResult]:
        """Insert rows directly (no call recorded)."""
        created = []
        for draft in drafts:
            now = utc_now()
            record = RecordResult(
                id=uuid.uuid4().hex,
                name=draft.name,
                price=draft.price,
                description=draft.description,
                category=draft.category,
                image=draft.image,
                created_at=now,
                updated_at=now,
            )
            self.rows[record.id] = record
            created.append(record)
        return created

    async def insert(self, draft: RecordCreate) -> RecordResult:
        self._check("insert")
        return self.seed(draft)[0]

    async def find_by_id(self, record_id: str) -> RecordResult | None:
        self._check("find_by_id")
        return self.rows.get(record_id)

    async def find_all(self) -> list[RecordResult]:
        self._check("find_all")
        return list(self.rows.values())

    async def update_by_id(self, record_id: str, changes: RecordUpdate) -> int:
        self._check("update_by_id")
        current = self.rows.get(record_id)
        if current is None:
            return 0
        self.rows[record_id] = replace(current, **changes.values(), updated_at=utc_now())
        return 1

    async def delete_by_id(self, record_id: str) -> int:
        self._check("delete_by_id")
        return 1 if self.rows.pop(record_id, None) is not None else 0


class FakeCache:
    """In-memory IRecordCache with Redis-like TTLs on a manual clock.

    advance(seconds) moves the clock; available=False makes every call
    raise CacheUnavailableException.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self.available = True
        self._values: dict[str, tuple[str, float | None]] = {}
        self._sets: dict[str, tuple[set[str], float | None]] = {}

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def _check(self, operation: str, key: str) -> None:
        if not self.available:
            raise CacheUnavailableException(operation, key, "cache is down")

    def _alive(self, expires_at: float | None) -> bool:
        return expires_at is None or expires_at > self.now

    def raw(self, key: str) -> str | None:
        """Peek at a live string entry without the availability check."""
        entry = self._values.get(key)
        return entry[0] if entry and self._alive(entry[1]) else None

    def members(self, key: str) -> set[str]:
        """Peek at a live set without the availability check."""
        entry = self._sets.get(key)
        return set(entry[0]) if entry and self._alive(entry[1]) else set()

    def ttl(self, key: str) -> float | None:
        entry = self._values.get(key) or self._sets.get(key)
        return None if entry is None or entry[1] is None else entry[1] - self.now

    async def get(self, key: str) -> str | None:
        self._check("get", key)
        return self.raw(key)

    async def set(self, key: str, value: str, ttl: int) -> None:
        self._check("set", key)
        self._values[key] = (value, self.now + ttl)

    async def delete(self, key: str) -> None:
        self._check("delete", key)
        self._values.pop(key, None)
        self._sets.pop(key, None)

    async def add_to_set(self, key: str, *members: str) -> None:
        self._check("add_to_set", key)
        entry = self._sets.get(key)
        if entry is None or not self._alive(entry[1]):
            entry = (set(), None)
        entry[0].update(members)
        self._sets[key] = entry

    async def remove_from_set(self, key: str, member: str) -> None:
        self._check("remove_from_set", key)
        entry = self._sets.get(key)
        if entry is not None:
            entry[0].discard(member)

    async def set_members(self, key: str) -> list[str]:
        self._check("set_members", key)
        return list(self.members(key))

    async def expire(self, key: str, ttl: int) -> None:
        self._check("expire", key)
        if key in self._values:
            self._values[key] = (self._values[key][0], self.now + ttl)
        elif key in self._sets:
            self._sets[key] = (self._sets[key][0], self.now + ttl)


def _draft(
    name: str = "A",
    price: int | str = 100,
    description: str = "d",
    category: str = "c",
    image: str | None = None,
) -> RecordCreate:
    return RecordCreate(
        name=name,
        price=Decimal(price),
        description=description,
        category=category,
        image=image,
    )


@pytest.fixture
def make_draft():
    """Factory for RecordCreate drafts (defaults: A, 100, d, c, no image)."""
    return _draft


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def coordinator(store: FakeRecordStore, cache: FakeCache) -> CatalogCacheCoordinator:
    """Coordinator over the in-memory fakes with the default one-hour TTL."""
    return CatalogCacheCoordinator(store, cache, ttl=DEFAULT_RECORD_TTL)


@pytest_asyncio.fixture
async def session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for repository tests; creates tables, empties them after.

    Skips (pytest.skip) when DATABASE_URL is not configured.
    """
    try:
        factory = database.get_session_factory()
    except SqlNotConfiguredException:
        pytest.skip("Postgres not configured: set DATABASE_URL")
    from catalog.infrastructure.persistence.models import CatalogRecord

    await database.create_tables()
    yield factory
    async with factory() as session, session.begin():
        await session.execute(CatalogRecord.__table__.delete())
    await database.dispose_engine()
