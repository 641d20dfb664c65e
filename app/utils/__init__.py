"""
Utilities Package

Helper functions used across the application:
- Record identifiers
- Date formatting for display
"""

import uuid
from datetime import date

ID_LENGTH = 32


def new_id() -> str:
    """Generate an opaque record identifier (ID_LENGTH hex characters)."""
    return uuid.uuid4().hex


def format_date(value: date | None) -> str:
    """
    Format a date for display, e.g. ``Oct 18, 2026``.

    Returns an empty string when the date is unset.
    """
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"
