"""Cache key builders. Single place for key format.

Record ids are opaque: a separator inside an id is fine because every
entry key is just the prefix plus the id. The one id that cannot be
cached is "ids", whose entry key would alias the index set.
"""

from catalog.core.constants import (
    CACHE_INDEX_SUFFIX,
    CACHE_KEY_SEP,
    CACHE_PREFIX_RECORD,
)

RECORD_INDEX_KEY = f"{CACHE_PREFIX_RECORD}{CACHE_KEY_SEP}{CACHE_INDEX_SUFFIX}"


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or would collide with the index key.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value cannot be used as a key component.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if value == CACHE_INDEX_SUFFIX:
        raise ValueError(
            f"Cache key component {name!r} must not equal {CACHE_INDEX_SUFFIX!r}"
        )


def record_key(record_id: str) -> str:
    """Cache key for a record entry (record:<id>)."""
    _validate_key_component(record_id, "record_id")
    return f"{CACHE_PREFIX_RECORD}{CACHE_KEY_SEP}{record_id}"
