"""Domain exceptions for the catalog.

Defines the failure taxonomy of the cache coordinator. These exceptions
are independent of the backing services; adapters translate driver
errors into them so callers never see SQLAlchemy or redis exceptions.
"""

from typing import Any


class CatalogException(Exception):
    """Base exception for all catalog errors.

    All custom exceptions inherit from this class so the outer layer can
    map them uniformly using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. record_id, operation).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class RecordNotFoundException(CatalogException):
    """Raised when a record is absent from the source that was consulted.

    record_id is None when no records exist at all (empty list).
    """

    def __init__(self, record_id: str | None = None, source: str = "store") -> None:
        """Initialize with the missing id and the source consulted.

        Args:
            record_id: The id that was not found, or None for "no records".
            source: "store" or "cache".
        """
        if record_id is None:
            message = "No records exist"
        else:
            message = f"Record not found: {record_id}"
        super().__init__(
            message,
            "RECORD_NOT_FOUND",
            {"record_id": record_id, "source": source},
        )


class StoreUnavailableException(CatalogException):
    """Raised when a durable store call fails or times out."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Durable store unavailable during {operation}",
            "STORE_UNAVAILABLE",
            {"operation": operation, "reason": reason},
        )


class CacheUnavailableException(CatalogException):
    """Raised when a cache call fails or the cache is not connected.

    Only surfaced to callers by the cache-only projections; swallowed on
    every best-effort path.
    """

    def __init__(self, operation: str, key: str, reason: str) -> None:
        super().__init__(
            f"Cache unavailable during {operation}",
            "CACHE_UNAVAILABLE",
            {"operation": operation, "key": key, "reason": reason},
        )


class SqlNotConfiguredException(CatalogException):
    """Raised when the durable store is used but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="The durable store requires DATABASE_URL, which is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class RecordRejectedException(CatalogException):
    """Raised when the durable store refuses a write (constraint violation).

    The store was reachable; retrying the same values fails again.
    """

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Durable store rejected {operation}",
            "RECORD_REJECTED",
            {"operation": operation, "reason": reason},
        )
