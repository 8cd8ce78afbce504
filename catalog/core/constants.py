"""Core constants: cache key layout and the record cache window.

Single source of truth for cache key structure. Used by
catalog.infrastructure.cache.keys and the cache coordinator.
"""

# Cache key prefix for catalog records (record:<id>, record:ids)
CACHE_PREFIX_RECORD = "record"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Suffix of the index set holding every known record id
CACHE_INDEX_SUFFIX = "ids"

# One hour, reset on every write that touches an entry or the index
DEFAULT_RECORD_TTL = 3600

# Confirmation messages returned by update/delete
RECORD_UPDATED_MESSAGE = "Record updated"
RECORD_DELETED_MESSAGE = "Record deleted"
