"""Entry ordering for listings."""

from __future__ import annotations

from typing import Iterable

from .listing.entry import Entry


def name_key(entry: Entry) -> str:
    return entry.name.lower()


def sort_entries(entries: Iterable[Entry], group_directories_first: bool = False) -> list[Entry]:
    """Sort by case-insensitive name; ties keep their scan order.

    With ``group_directories_first`` directories come before everything
    else, each group still ordered by name.
    """
    ordered = sorted(entries, key=name_key)
    if group_directories_first:
        ordered = [entry for entry in ordered if entry.is_dir] + [entry for entry in ordered if not entry.is_dir]
    return ordered
