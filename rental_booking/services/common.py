"""Shared service helpers."""

from datetime import date
from typing import Optional

from flask import current_app, has_app_context

from ..exceptions import ValidationError
from ..models.store import Store
from ..utils.dates import today_local

DEFAULT_TIMEZONE = "UTC"


def _store() -> Store:
    """Get the singleton store instance."""
    return Store.instance()


def _today() -> date:
    """Local calendar date in the configured timezone; wrapper for easier testing/mocking."""
    tz = DEFAULT_TIMEZONE
    if has_app_context():
        tz = current_app.config.get("TIMEZONE", DEFAULT_TIMEZONE)
    return today_local(tz)


def to_int_safe(value) -> Optional[int]:
    """Safely convert to int; return None if invalid."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def require_positive_int(value, field: str) -> int:
    """Accept ints (or integral strings) > 0; bools are rejected."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a positive integer")
    n = to_int_safe(value)
    if n is None or n <= 0 or (isinstance(value, float) and value != n):
        raise ValidationError(f"{field} must be a positive integer")
    return n


def _lc(s):
    """Safe lowercase for case-insensitive compare."""
    return (s or "").lower()
