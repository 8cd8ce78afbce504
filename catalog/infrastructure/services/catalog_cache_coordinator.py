"""Cache-aside coordinator for catalog records.

All record access goes through CatalogCacheCoordinator. Writes hit the
durable store first and are then mirrored into the cache; reads try the
cache first and fall back to the store, repairing the cache on the way
out (read-through). The cache is never updated in place: a write deletes
or overwrites the whole entry.

Cache failures on every path except the cache-only projections are
logged and swallowed. Store failures always propagate.

Concurrent writers to the same id are not serialized: a slower writer can
leave its (older) snapshot in the cache after a faster one. The entry TTL
bounds how long such a snapshot can be served.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from contextlib import contextmanager

from catalog.application.dtos.record import RecordCreate, RecordResult, RecordUpdate
from catalog.application.interfaces.repositories import IRecordRepository
from catalog.application.interfaces.services import IRecordCache
from catalog.core.constants import (
    DEFAULT_RECORD_TTL,
    RECORD_DELETED_MESSAGE,
    RECORD_UPDATED_MESSAGE,
)
from catalog.domain.exceptions import (
    CacheUnavailableException,
    RecordNotFoundException,
    StoreUnavailableException,
)
from catalog.infrastructure.cache.keys import RECORD_INDEX_KEY, record_key
from catalog.infrastructure.cache.record_codec import (
    RecordDecodeError,
    decode_record,
    encode_record,
)
from catalog.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


@contextmanager
def _cache_errors_swallowed(action: str, key: str) -> Iterator[None]:
    """Log and suppress CacheUnavailableException raised inside the block."""
    try:
        yield
    except CacheUnavailableException as e:
        logger.warning(
            "Cache %s skipped for %s: %s", action, key, e.details.get("reason")
        )


class CatalogCacheCoordinator:
    """Keeps the record cache (entries + index set) consistent with the durable store.

    Both collaborators are injected so tests can substitute fakes. The
    coordinator holds no state beyond them and the TTL.
    """

    def __init__(
        self,
        store: IRecordRepository,
        cache: IRecordCache,
        *,
        ttl: int = DEFAULT_RECORD_TTL,
    ) -> None:
        self.store = store
        self.cache = cache
        self.ttl = ttl

    # ---- cache helpers (best-effort) ----

    @staticmethod
    def _entry_key(record_id: str) -> str | None:
        """Return record:<id>, or None for an id that has no cache entry."""
        try:
            return record_key(record_id)
        except ValueError as e:
            logger.warning("Record id %r is not cacheable: %s", record_id, e)
            return None

    async def _cache_record(self, record: RecordResult) -> None:
        key = self._entry_key(record.id)
        if key is None:
            return
        with _cache_errors_swallowed("set", key):
            await self.cache.set(key, encode_record(record), self.ttl)

    async def _drop_cached(self, record_id: str) -> None:
        key = self._entry_key(record_id)
        if key is None:
            return
        with _cache_errors_swallowed("delete", key):
            await self.cache.delete(key)

    async def _index_ids(self, *record_ids: str) -> None:
        with _cache_errors_swallowed("index", RECORD_INDEX_KEY):
            await self.cache.add_to_set(RECORD_INDEX_KEY, *record_ids)
            await self.cache.expire(RECORD_INDEX_KEY, self.ttl)

    async def _read_cached(self, record_id: str) -> RecordResult | None:
        """Return the cached record, or None on miss, cache failure, or a corrupt entry."""
        key = self._entry_key(record_id)
        if key is None:
            return None
        raw: str | None = None
        with _cache_errors_swallowed("get", key):
            raw = await self.cache.get(key)
        if raw is None:
            return None
        try:
            return decode_record(raw)
        except RecordDecodeError as e:
            logger.warning("Ignoring undecodable cache entry %s: %s", key, e)
            return None

    async def _index_members(self) -> list[str]:
        with _cache_errors_swallowed("read index", RECORD_INDEX_KEY):
            return await self.cache.set_members(RECORD_INDEX_KEY)
        return []

    async def _load_indexed(self, record_id: str) -> RecordResult | None:
        """Resolve one indexed id for list_records; None drops it from the result."""
        cached = await self._read_cached(record_id)
        if cached is not None:
            return cached
        try:
            record = await self.store.find_by_id(record_id)
        except StoreUnavailableException as e:
            logger.warning("Dropping record %s from list: %s", record_id, e.message)
            return None
        if record is None:
            logger.debug("Indexed record %s no longer exists; dropped", record_id)
            return None
        await self._cache_record(record)
        return record

    # ---- read-through / write-through operations ----

    @traced("catalog.create_record")
    async def create_record(self, draft: RecordCreate) -> RecordResult:
        """Insert a record, then mirror it into its entry and the index set.

        Raises:
            StoreUnavailableException: The insert failed; the cache is untouched.
            RecordRejectedException: The store refused the draft.
        """
        record = await self.store.insert(draft)
        await asyncio.gather(self._cache_record(record), self._index_ids(record.id))
        logger.info("Record %s created", record.id)
        return record

    @traced("catalog.get_record")
    async def get_record(self, record_id: str) -> RecordResult:
        """Return a record from the cache, or from the store (repairing the cache).

        Raises:
            RecordNotFoundException: The store has no such record.
            StoreUnavailableException: Cache missed and the store failed.
        """
        cached = await self._read_cached(record_id)
        if cached is not None:
            add_span_attributes(cache_hit=True)
            return cached
        add_span_attributes(cache_hit=False)
        record = await self.store.find_by_id(record_id)
        if record is None:
            raise RecordNotFoundException(record_id)
        await self._cache_record(record)
        return record

    @traced("catalog.list_records")
    async def list_records(self) -> list[RecordResult]:
        """Return all records, rebuilding the index set from the store when it is empty.

        Order is unspecified. Indexed ids that no longer resolve are dropped.

        Raises:
            RecordNotFoundException: Index set and store are both empty.
            StoreUnavailableException: The index was empty and find_all failed.
        """
        record_ids = await self._index_members()
        if record_ids:
            add_span_attributes(index_hit=True, count=len(record_ids))
            loaded = await asyncio.gather(*(self._load_indexed(i) for i in record_ids))
            return [r for r in loaded if r is not None]

        add_span_attributes(index_hit=False)
        records = await self.store.find_all()
        if not records:
            raise RecordNotFoundException()
        await self._index_ids(*(r.id for r in records))
        await asyncio.gather(*(self._cache_record(r) for r in records))
        logger.info("Record index rebuilt from store: %s ids", len(records))
        return records

    @traced("catalog.update_record")
    async def update_record(self, record_id: str, changes: RecordUpdate) -> str:
        """Update the store, then drop and repopulate the cache entry.

        The index set is not touched. Returns a confirmation message.

        Raises:
            RecordNotFoundException: No record matched.
            StoreUnavailableException: The update failed.
            RecordRejectedException: The store refused the changes.
        """
        affected = await self.store.update_by_id(record_id, changes)
        if not affected:
            raise RecordNotFoundException(record_id)
        await self._drop_cached(record_id)
        try:
            updated = await self.store.find_by_id(record_id)
        except StoreUnavailableException as e:
            # Entry stays absent; the next read repairs it.
            logger.warning("Re-read of updated record %s failed: %s", record_id, e.message)
            return RECORD_UPDATED_MESSAGE
        if updated is not None:
            await self._cache_record(updated)
        logger.info("Record %s updated", record_id)
        return RECORD_UPDATED_MESSAGE

    @traced("catalog.delete_record")
    async def delete_record(self, record_id: str) -> str:
        """Delete from the store, then drop the entry and the index membership.

        Raises:
            RecordNotFoundException: Nothing was deleted.
            StoreUnavailableException: The delete failed.
        """
        affected = await self.store.delete_by_id(record_id)
        if not affected:
            raise RecordNotFoundException(record_id)
        await self._drop_cached(record_id)
        with _cache_errors_swallowed("unindex", RECORD_INDEX_KEY):
            await self.cache.remove_from_set(RECORD_INDEX_KEY, record_id)
        logger.info("Record %s deleted", record_id)
        return RECORD_DELETED_MESSAGE

    # ---- cache-only projections (diagnostics; no fallback, no repair) ----

    @traced("catalog.get_cached_record")
    async def get_cached_record(self, record_id: str) -> RecordResult:
        """Return the record exactly as cached.

        Raises:
            RecordNotFoundException: No (decodable) entry for this id.
            CacheUnavailableException: The cache could not be reached.
        """
        key = self._entry_key(record_id)
        if key is None:
            raise RecordNotFoundException(record_id, source="cache")
        raw = await self.cache.get(key)
        if raw is None:
            raise RecordNotFoundException(record_id, source="cache")
        try:
            return decode_record(raw)
        except RecordDecodeError as e:
            logger.warning("Cached entry %s is undecodable: %s", key, e)
            raise RecordNotFoundException(record_id, source="cache") from e

    @traced("catalog.list_cached_records")
    async def list_cached_records(self) -> list[RecordResult]:
        """Return every indexed record that still has a cache entry.

        Raises:
            RecordNotFoundException: The index set is empty or missing.
            CacheUnavailableException: The cache could not be reached.
        """
        record_ids = await self.cache.set_members(RECORD_INDEX_KEY)
        if not record_ids:
            raise RecordNotFoundException(source="cache")
        keys = [k for k in map(self._entry_key, record_ids) if k is not None]
        raws = await asyncio.gather(*(self.cache.get(k) for k in keys))
        records: list[RecordResult] = []
        for key, raw in zip(keys, raws):
            if raw is None:
                continue
            try:
                records.append(decode_record(raw))
            except RecordDecodeError as e:
                logger.warning("Skipping undecodable cache entry %s: %s", key, e)
        return records
