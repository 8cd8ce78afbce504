"""Tests for cache key builders."""

import pytest

from catalog.infrastructure.cache.keys import RECORD_INDEX_KEY, record_key


def test_record_key_format() -> None:
    assert record_key("ckrec0001") == "record:ckrec0001"


def test_index_key_format() -> None:
    assert RECORD_INDEX_KEY == "record:ids"


def test_record_key_accepts_ids_with_separator() -> None:
    """Ids are opaque; a separator inside one still yields a distinct key."""
    assert record_key("legacy:1") == "record:legacy:1"
    assert record_key("legacy:1") != RECORD_INDEX_KEY


@pytest.mark.parametrize("bad_id", ["", "ids"])
def test_record_key_rejects_ids_that_collide(bad_id: str) -> None:
    """Empty ids and "ids" (index alias) are rejected."""
    with pytest.raises(ValueError):
        record_key(bad_id)
