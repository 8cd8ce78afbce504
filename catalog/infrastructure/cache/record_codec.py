"""Record <-> cache text codec.

JSON, field for field. price is written as a string so Decimal values
round-trip exactly; image is null when absent and "" stays "".
Datetimes are ISO 8601 with offset.
"""

import json
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from catalog.application.dtos.record import RecordResult

_FIELDS = (
    "id",
    "name",
    "price",
    "description",
    "category",
    "image",
    "created_at",
    "updated_at",
)


class RecordDecodeError(ValueError):
    """Cached text is not a valid serialized record."""


def record_to_dict(record: RecordResult) -> dict[str, Any]:
    return {
        "id": record.id,
        "name": record.name,
        "price": str(record.price),
        "description": record.description,
        "category": record.category,
        "image": record.image,
        "created_at": record.created_at.isoformat(),
        "updated_at": record.updated_at.isoformat(),
    }


def encode_record(record: RecordResult) -> str:
    """Serialize a record for storage under record:<id>."""
    return json.dumps(record_to_dict(record), separators=(",", ":"))


def decode_record(raw: str | bytes) -> RecordResult:
    """Rebuild a record from cached text.

    Raises:
        RecordDecodeError: If the text is not JSON or a field is missing/invalid.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise RecordDecodeError(f"Cached record is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise RecordDecodeError("Cached record must be a JSON object")
    missing = [f for f in _FIELDS if f not in data]
    if missing:
        raise RecordDecodeError(f"Cached record is missing fields: {', '.join(missing)}")
    try:
        return RecordResult(
            id=data["id"],
            name=data["name"],
            price=Decimal(data["price"]),
            description=data["description"],
            category=data["category"],
            image=data["image"],
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )
    except (InvalidOperation, TypeError, ValueError) as e:
        raise RecordDecodeError(f"Cached record has an invalid field: {e}") from e
