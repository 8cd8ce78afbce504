"""Tests for the record cache codec (JSON text under record:<id>)."""

import json
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from catalog.application.dtos.record import RecordResult
from catalog.infrastructure.cache.record_codec import (
    RecordDecodeError,
    decode_record,
    encode_record,
)


def _record(image: str | None = None, price: str = "69900.50") -> RecordResult:
    return RecordResult(
        id="ckrec0001",
        name="IQOS 3 DUO",
        price=Decimal(price),
        description="Heated tobacco device",
        category="device",
        image=image,
        created_at=datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC),
        updated_at=datetime(2025, 1, 16, 8, 30, 0, tzinfo=UTC),
    )


def test_encode_is_field_for_field_json() -> None:
    """Encoded text is a flat JSON object; price is a string, absent image is null."""
    data = json.loads(encode_record(_record()))
    assert data == {
        "id": "ckrec0001",
        "name": "IQOS 3 DUO",
        "price": "69900.50",
        "description": "Heated tobacco device",
        "category": "device",
        "image": None,
        "created_at": "2025-01-15T12:00:00+00:00",
        "updated_at": "2025-01-16T08:30:00+00:00",
    }


def test_absent_and_empty_image_stay_distinct() -> None:
    """None decodes as None and "" decodes as ""."""
    assert decode_record(encode_record(_record(image=None))).image is None
    assert decode_record(encode_record(_record(image=""))).image == ""


def test_round_trip_preserves_decimal_scale_and_timestamps() -> None:
    record = _record(image="https://cdn.example.com/a.png", price="0.10")
    decoded = decode_record(encode_record(record))
    assert decoded == record
    assert str(decoded.price) == "0.10"
    assert decoded.created_at.tzinfo is not None


def test_decode_accepts_bytes() -> None:
    record = _record()
    assert decode_record(encode_record(record).encode("utf-8")) == record


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        "[1, 2]",
        '{"id": "x"}',
        json.dumps({**json.loads(encode_record(_record())), "price": "cheap"}),
        json.dumps({**json.loads(encode_record(_record())), "created_at": "yesterday"}),
    ],
)
def test_decode_rejects_invalid_payloads(raw: str) -> None:
    with pytest.raises(RecordDecodeError):
        decode_record(raw)
