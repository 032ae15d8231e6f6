"""Utility helpers for neo-role-manager."""

from .datetime import utc_now, ensure_utc

__all__ = [
    "utc_now",
    "ensure_utc",
]
