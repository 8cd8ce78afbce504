"""Rebuild the record index and cache entries from the durable store.

Drops the index set, then lists records through the coordinator so the
bootstrap path re-indexes every id and repopulates every record:<id>
entry with a fresh TTL.

Usage:
    uv run python -m scripts.warm_catalog_cache [--dry-run]

Requires: DATABASE_URL and a reachable Redis (REDIS_HOST/REDIS_PORT).
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from catalog.core.resources import open_coordinator
from catalog.domain.exceptions import CatalogException, RecordNotFoundException
from catalog.infrastructure.cache.keys import RECORD_INDEX_KEY
from catalog.shared.telemetry.logging import setup_logging


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


async def warm(*, dry_run: bool) -> int:
    """Warm the cache and return the number of records cached."""
    async with open_coordinator() as coordinator:
        if dry_run:
            records = await coordinator.store.find_all()
            print(f"Dry run: {len(records)} records would be cached")
            return len(records)
        await coordinator.cache.delete(RECORD_INDEX_KEY)
        try:
            records = await coordinator.list_records()
        except RecordNotFoundException:
            print("No records in the durable store; nothing to warm")
            return 0
        print(f"Cached {len(records)} records (index: {RECORD_INDEX_KEY})")
        return len(records)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only count records in the durable store",
    )
    args = parser.parse_args()
    load_dotenv(_project_root() / ".env", override=True)
    setup_logging()
    try:
        asyncio.run(warm(dry_run=args.dry_run))
    except CatalogException as e:
        print(f"Cache warm failed: {e.message} ({e.error_code})", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
