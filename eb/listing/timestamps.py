"""Timestamp columns for the long view."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from .entry import Entry, UnsupportedFieldError

TIME_FORMAT = "%d %b %H:%M"


class TimeField(Enum):
    """Timestamp kinds in canonical column order."""

    MODIFIED = "modified"
    CHANGED = "changed"
    CREATED = "created"
    ACCESSED = "accessed"


def format_timestamp(seconds: float) -> str:
    """Render POSIX ``seconds`` in local time as ``"05 Mar 14:22"``."""
    return datetime.fromtimestamp(seconds).strftime(TIME_FORMAT)


def entry_timestamp(entry: Entry, kind: TimeField) -> float:
    """Return the raw timestamp of ``kind`` for ``entry``.

    Raises ``UnsupportedFieldError`` when the entry carries no such time.
    """
    value = getattr(entry, kind.value)
    if value is None:
        raise UnsupportedFieldError(kind.value, entry.name)
    return value


def format_entry_time(entry: Entry, kind: TimeField) -> str:
    return format_timestamp(entry_timestamp(entry, kind))
