"""Repositories: durable store access returning application DTOs."""

from catalog.infrastructure.persistence.repositories.base import BaseRepository
from catalog.infrastructure.persistence.repositories.record_repo import RecordRepository

__all__ = ["BaseRepository", "RecordRepository"]
