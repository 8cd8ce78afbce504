"""Application DTOs (read-models and inputs, no ORM types)."""

from catalog.application.dtos.record import RecordCreate, RecordResult, RecordUpdate

__all__ = ["RecordCreate", "RecordResult", "RecordUpdate"]
