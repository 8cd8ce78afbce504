"""Service interfaces (ports) used by application services."""

from __future__ import annotations

from typing import Protocol


class IRecordCache(Protocol):
    """Cache port for the record coordinator (e.g. Redis).

    Values are the already-serialized record text. Every method raises
    CacheUnavailableException when the backend cannot be reached; a missing
    key is reported as None (get) or an empty list (set_members).
    """

    async def get(self, key: str) -> str | None:
        """Return the stored value or None."""

    async def set(self, key: str, value: str, ttl: int) -> None:
        """Store value with a TTL in seconds."""

    async def delete(self, key: str) -> None:
        """Remove key."""

    async def add_to_set(self, key: str, *members: str) -> None:
        """Add members to the set at key."""

    async def remove_from_set(self, key: str, member: str) -> None:
        """Remove member from the set at key."""

    async def set_members(self, key: str) -> list[str]:
        """Return all members of the set at key (empty if missing)."""

    async def expire(self, key: str, ttl: int) -> None:
        """Reset the TTL of key."""
