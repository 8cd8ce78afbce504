"""Application ports: durable store and cache protocols."""

from catalog.application.interfaces.repositories import IRecordRepository
from catalog.application.interfaces.services import IRecordCache

__all__ = ["IRecordCache", "IRecordRepository"]
