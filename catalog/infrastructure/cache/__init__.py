"""Cache: Redis service, key builders and the record codec.

Used by the cache coordinator. CacheService uses catalog.core.config;
key format is in keys.py.
"""

from catalog.infrastructure.cache.keys import RECORD_INDEX_KEY, record_key
from catalog.infrastructure.cache.record_codec import (
    RecordDecodeError,
    decode_record,
    encode_record,
)
from catalog.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "RECORD_INDEX_KEY",
    "RecordDecodeError",
    "decode_record",
    "encode_record",
    "record_key",
]
