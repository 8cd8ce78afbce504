"""Application layer: DTOs and ports.

Depends only on domain definitions (DIP). Infrastructure implements the
ports (durable store repository, Redis cache).
"""

from catalog.application.dtos import RecordCreate, RecordResult, RecordUpdate
from catalog.application.interfaces import IRecordCache, IRecordRepository

__all__ = [
    "IRecordCache",
    "IRecordRepository",
    "RecordCreate",
    "RecordResult",
    "RecordUpdate",
]
