"""Filesystem entry records consumed by the long and short listing views.

An ``Entry`` is captured once from ``os.stat`` and never re-read while a
batch is being formatted.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable

HIDDEN_PREFIX = "."


class UnsupportedFieldError(LookupError):
    """Raised when an entry cannot provide a metadata field on this platform."""

    def __init__(self, field_name: str, entry_name: str) -> None:
        super().__init__(f"{field_name} time is not available for {entry_name!r} on this platform")
        self.field_name = field_name
        self.entry_name = entry_name


class EntryKind(Enum):
    DIRECTORY = "directory"
    FILE = "file"
    OTHER = "other"


@dataclass(frozen=True)
class Entry:
    """Metadata snapshot for one filesystem object.

    Timestamps are POSIX seconds. ``created`` is ``None`` where the platform
    does not record birth time.
    """

    name: str
    kind: EntryKind
    size: int = 0
    links: int = 1
    inode: int = 0
    uid: int = 0
    gid: int = 0
    blocks: int = 0
    mode: int = 0
    modified: float | None = None
    changed: float | None = None
    created: float | None = None
    accessed: float | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(HIDDEN_PREFIX)

    @classmethod
    def from_stat(cls, name: str, st: os.stat_result) -> "Entry":
        """Build an entry from an ``os.stat_result`` captured by the caller."""
        if stat.S_ISDIR(st.st_mode):
            kind = EntryKind.DIRECTORY
        elif stat.S_ISREG(st.st_mode):
            kind = EntryKind.FILE
        else:
            kind = EntryKind.OTHER
        return cls(
            name=name,
            kind=kind,
            size=int(st.st_size),
            links=int(st.st_nlink),
            inode=int(st.st_ino),
            uid=int(st.st_uid),
            gid=int(st.st_gid),
            blocks=int(getattr(st, "st_blocks", 0)),
            mode=int(st.st_mode),
            modified=float(st.st_mtime),
            changed=float(st.st_ctime),
            created=_birth_time(st),
            accessed=float(st.st_atime),
        )

    @classmethod
    def from_path(cls, path: Path, name: str | None = None) -> "Entry":
        """Stat ``path`` (following symlinks) and build its entry.

        ``OSError`` from the stat call propagates to the caller.
        """
        display_name = name if name is not None else (path.name or str(path))
        return cls.from_stat(display_name, os.stat(path))


def _birth_time(st: os.stat_result) -> float | None:
    value = getattr(st, "st_birthtime", None)
    if value is None:
        return None
    return float(value)


def visible_entries(entries: Iterable[Entry], show_hidden: bool) -> list[Entry]:
    """Return ``entries`` in input order, minus hidden names unless shown."""
    if show_hidden:
        return list(entries)
    return [entry for entry in entries if not entry.is_hidden]
