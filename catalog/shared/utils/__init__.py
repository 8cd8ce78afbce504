"""Shared utilities: datetime, generators."""

from catalog.shared.utils.datetime import ensure_utc, utc_now
from catalog.shared.utils.generators import generate_cuid

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "utc_now",
]
