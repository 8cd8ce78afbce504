"""Seed catalog records from a JSON file through the cache coordinator.

Creates the catalog_record table if missing, then creates each record so
both the durable store and the cache (entry + index) are populated.

Usage:
    uv run python -m scripts.seed_catalog [path/to/seed-catalog.json]

Default path: scripts/seed-catalog.json (relative to project root).
Requires: DATABASE_URL and a reachable Redis.
"""

from __future__ import annotations

import asyncio
import json
import sys
from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv

from catalog.application.dtos.record import RecordCreate
from catalog.core.resources import open_coordinator
from catalog.domain.exceptions import CatalogException
from catalog.infrastructure.persistence.database import create_tables
from catalog.shared.telemetry.logging import setup_logging


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _draft(item: dict) -> RecordCreate:
    return RecordCreate(
        name=item["name"],
        price=Decimal(str(item["price"])),
        description=item.get("description", ""),
        category=item["category"],
        image=item.get("image"),
    )


async def run(path: Path) -> None:
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    items = data.get("records", [])

    async with open_coordinator() as coordinator:
        await create_tables()
        for item in items:
            created = await coordinator.create_record(_draft(item))
            print(f"Record {created.name} -> {created.id}")

    print(f"Seed completed: {len(items)} records.")


def main() -> None:
    root = _project_root()
    load_dotenv(root / ".env", override=True)
    setup_logging()
    path_arg = sys.argv[1] if len(sys.argv) > 1 else None
    path = Path(path_arg) if path_arg else root / "scripts" / "seed-catalog.json"
    if not path.is_absolute():
        path = (root / path).resolve()
    if not path.exists():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    try:
        asyncio.run(run(path))
    except CatalogException as e:
        print(f"Seed failed: {e.message} ({e.error_code})", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
