"""Directory listing formatters: long view columns and short view grids."""

from __future__ import annotations

from .columns import ColumnWidths, Field, FieldSelection, LongListing, SizeStyle, format_long
from .entry import Entry, EntryKind, UnsupportedFieldError, visible_entries
from .grid import GRID_MARGIN, LONG_GRID_MARGIN, Direction, GridCell, fit_into_width, layout_grid
from .numbers import format_human_size, format_with_separator
from .permissions import format_permissions
from .timestamps import TimeField, format_timestamp

__all__ = [
    "ColumnWidths",
    "Direction",
    "Entry",
    "EntryKind",
    "Field",
    "FieldSelection",
    "GRID_MARGIN",
    "GridCell",
    "LONG_GRID_MARGIN",
    "LongListing",
    "SizeStyle",
    "TimeField",
    "UnsupportedFieldError",
    "fit_into_width",
    "format_human_size",
    "format_long",
    "format_permissions",
    "format_timestamp",
    "format_with_separator",
    "layout_grid",
    "visible_entries",
]
