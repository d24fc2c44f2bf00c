"""Utility functions."""

from .datetime import days_until, ensure_utc, from_iso, now_utc, to_iso
from .ids import new_id

__all__ = [
    "days_until",
    "ensure_utc",
    "from_iso",
    "new_id",
    "now_utc",
    "to_iso",
]
