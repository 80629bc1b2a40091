"""Long view column model and the two-pass width negotiation.

A ``FieldSelection`` turns into an ordered tuple of ``Column`` descriptors.
``LongListing`` renders every cell once while measuring, then pads each
cell to its column's widest value so no row overflows its column.
"""

from __future__ import annotations

import grp
import pwd
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Callable, Iterable

from ..ansi import display_width, pad_left, pad_right
from .entry import Entry, visible_entries
from .numbers import format_size_field
from .permissions import format_permissions
from .timestamps import TimeField, format_entry_time

COLUMN_SEPARATOR = " "
NAME_HEADER = "Name"
ZERO_BLOCKS = "-"


class Field(Enum):
    """Long view fields in canonical render order."""

    INODE = "inode"
    PERMISSIONS = "permissions"
    LINKS = "links"
    SIZE = "size"
    BLOCKS = "blocks"
    USER = "user"
    GROUP = "group"
    MODIFIED = "modified"
    CHANGED = "changed"
    CREATED = "created"
    ACCESSED = "accessed"

    @property
    def header(self) -> str:
        return self.value.capitalize()


TIME_FIELDS = {
    TimeField.MODIFIED: Field.MODIFIED,
    TimeField.CHANGED: Field.CHANGED,
    TimeField.CREATED: Field.CREATED,
    TimeField.ACCESSED: Field.ACCESSED,
}


class Alignment(Enum):
    LEFT = "left"
    RIGHT = "right"


class SizeStyle(Enum):
    DECIMAL = "decimal"
    BINARY = "binary"
    BYTES = "bytes"


@lru_cache(maxsize=None)
def user_name(uid: int) -> str:
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


@lru_cache(maxsize=None)
def group_name(gid: int) -> str:
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


def format_blocks(entry: Entry) -> str:
    return str(entry.blocks) if entry.blocks else ZERO_BLOCKS


@dataclass(frozen=True)
class Column:
    """One active long view column: how to render a cell and how to align it."""

    field: Field
    render: Callable[[Entry], str]
    alignment: Alignment = Alignment.RIGHT

    @property
    def header(self) -> str:
        return self.field.header

    def pad(self, text: str, width: int) -> str:
        if self.alignment is Alignment.LEFT:
            return pad_right(text, width)
        return pad_left(text, width)


@dataclass(frozen=True)
class FieldSelection:
    """Immutable choice of long view columns and their conventions."""

    inode: bool = False
    permissions: bool = True
    links: bool = False
    size: bool = True
    blocks: bool = False
    user: bool = True
    group: bool = False
    times: tuple[TimeField, ...] = (TimeField.MODIFIED,)
    size_style: SizeStyle = SizeStyle.DECIMAL
    numeric_ids: bool = False
    header: bool = False

    @classmethod
    def from_args(cls, args) -> "FieldSelection":
        """Build a selection from parsed command-line arguments."""
        times: tuple[TimeField, ...] = ()
        if not args.no_time:
            chosen = {
                TimeField.MODIFIED: args.modified,
                TimeField.CHANGED: args.changed,
                TimeField.CREATED: args.created,
                TimeField.ACCESSED: args.accessed,
            }
            times = tuple(kind for kind, enabled in chosen.items() if enabled) or (TimeField.MODIFIED,)

        return cls(
            inode=args.inode,
            permissions=not args.no_permissions,
            links=args.links,
            size=not args.no_filesize,
            blocks=args.blocks,
            user=not args.no_user,
            group=args.group,
            times=times,
            size_style=SizeStyle(args.size_style),
            numeric_ids=args.numeric,
            header=args.header,
        )

    def _render_size(self, entry: Entry) -> str:
        return format_size_field(
            entry,
            exact_bytes=self.size_style is SizeStyle.BYTES,
            use_binary=self.size_style is SizeStyle.BINARY,
        )

    def _render_user(self, entry: Entry) -> str:
        return str(entry.uid) if self.numeric_ids else user_name(entry.uid)

    def _render_group(self, entry: Entry) -> str:
        return str(entry.gid) if self.numeric_ids else group_name(entry.gid)

    def columns(self) -> tuple[Column, ...]:
        """Return active columns in canonical order."""
        out: list[Column] = []
        if self.inode:
            out.append(Column(Field.INODE, lambda entry: str(entry.inode)))
        if self.permissions:
            out.append(
                Column(
                    Field.PERMISSIONS,
                    lambda entry: format_permissions(entry.mode, entry.is_dir),
                    Alignment.LEFT,
                )
            )
        if self.links:
            out.append(Column(Field.LINKS, lambda entry: str(entry.links)))
        if self.size:
            out.append(Column(Field.SIZE, self._render_size))
        if self.blocks:
            out.append(Column(Field.BLOCKS, format_blocks))
        if self.user:
            out.append(Column(Field.USER, self._render_user))
        if self.group:
            out.append(Column(Field.GROUP, self._render_group))
        for kind in TimeField:
            if kind in self.times:
                out.append(Column(TIME_FIELDS[kind], _time_renderer(kind)))
        return tuple(out)


def _time_renderer(kind: TimeField) -> Callable[[Entry], str]:
    def render(entry: Entry) -> str:
        return format_entry_time(entry, kind)

    return render


@dataclass
class ColumnWidths:
    """Widest rendered value per field for one batch of entries."""

    widths: dict[Field, int] = field(default_factory=dict)

    def update(self, column_field: Field, width: int) -> None:
        if width > self.widths.get(column_field, -1):
            self.widths[column_field] = width

    def __getitem__(self, column_field: Field) -> int:
        return self.widths[column_field]

    def __contains__(self, column_field: Field) -> bool:
        return column_field in self.widths


class LongListing:
    """Render one batch of entries as aligned long view rows.

    Cells are rendered during measuring and reused when padding, so each
    value (sizes included) is computed exactly once per entry.
    """

    def __init__(self, entries: Iterable[Entry], selection: FieldSelection) -> None:
        self.selection = selection
        self.columns = selection.columns()
        self.entries = tuple(entries)
        self.widths = ColumnWidths()
        self._cells: list[dict[Field, str]] = []
        self._measure()

    def _measure(self) -> None:
        for column in self.columns:
            self.widths.update(column.field, display_width(column.header) if self.selection.header else 0)
        for entry in self.entries:
            cells: dict[Field, str] = {}
            for column in self.columns:
                text = column.render(entry)
                cells[column.field] = text
                self.widths.update(column.field, display_width(text))
            self._cells.append(cells)

    def header_line(self) -> str:
        parts = [column.pad(column.header, self.widths[column.field]) + COLUMN_SEPARATOR for column in self.columns]
        return "".join(parts) + NAME_HEADER

    def lines(self) -> list[str]:
        """Return rendered rows in input order, with the header row first when selected."""
        out: list[str] = []
        if self.selection.header and self.entries:
            out.append(self.header_line())
        for entry, cells in zip(self.entries, self._cells):
            parts = [
                column.pad(cells[column.field], self.widths[column.field]) + COLUMN_SEPARATOR
                for column in self.columns
            ]
            out.append("".join(parts) + entry.name)
        return out


def format_long(entries: Iterable[Entry], selection: FieldSelection, show_hidden: bool = True) -> list[str]:
    """Return long view rows for ``entries``; hidden names drop out before measuring."""
    return LongListing(visible_entries(entries, show_hidden), selection).lines()
