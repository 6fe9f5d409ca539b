"""Date coercion shared by models fed from advisor and browser payloads."""

from __future__ import annotations

from datetime import datetime


def coerce_date(value: object) -> object:
    """Reduce ISO timestamps (``2024-01-01T08:30:00Z``) to their calendar date.

    Anything that is not a timestamp string or ``datetime`` is returned untouched
    so pydantic can apply its own validation.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        if "T" in stripped:
            return stripped.split("T", 1)[0]
        if " " in stripped:
            return stripped.split(" ", 1)[0]
        return stripped
    return value
