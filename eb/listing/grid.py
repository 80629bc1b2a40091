"""Pack display items into a terminal-width grid.

The search tries the largest column count first and keeps the first layout
whose column widths plus margins fit. Anything that cannot be packed into
at least two columns is printed one item per line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from ..ansi import display_width, pad_right

GRID_MARGIN = 2
LONG_GRID_MARGIN = 4


class Direction(Enum):
    ACROSS = "across"
    DOWN = "down"


@dataclass(frozen=True)
class GridCell:
    contents: str
    width: int

    @classmethod
    def of(cls, contents: str) -> "GridCell":
        return cls(contents, display_width(contents))


@dataclass(frozen=True)
class GridLayout:
    """Cell placement for one candidate column count."""

    rows: list[list[GridCell]]
    widths: list[int]

    def total_width(self, margin: int) -> int:
        return sum(self.widths) + margin * (len(self.widths) - 1)

    def render(self, margin: int) -> str:
        gap = " " * margin
        lines: list[str] = []
        for row in self.rows:
            parts = [pad_right(cell.contents, self.widths[idx]) for idx, cell in enumerate(row[:-1])]
            parts.append(row[-1].contents)
            lines.append(gap.join(parts))
        return "\n".join(lines) + "\n"


def _layout(cells: Sequence[GridCell], num_columns: int, direction: Direction) -> GridLayout:
    count = len(cells)
    num_rows = -(-count // num_columns)
    if direction is Direction.DOWN:
        # rows are fixed first; trailing columns may go unused
        num_columns = -(-count // num_rows)

    rows: list[list[GridCell]] = [[] for _ in range(num_rows)]
    widths = [0] * num_columns
    for idx, cell in enumerate(cells):
        if direction is Direction.ACROSS:
            row, col = divmod(idx, num_columns)
        else:
            col, row = divmod(idx, num_rows)
        rows[row].append(cell)
        widths[col] = max(widths[col], cell.width)
    return GridLayout(rows=rows, widths=widths)


def _max_columns(cells: Sequence[GridCell], max_width: int, margin: int) -> int:
    """Upper bound on columns: even all-narrowest columns must fit ``max_width``."""
    narrowest = min(cell.width for cell in cells) + margin
    if narrowest <= 0:
        return len(cells)
    return min(len(cells), (max_width + margin) // narrowest)


def fit_into_width(
    cells: Sequence[GridCell],
    max_width: int,
    direction: Direction = Direction.DOWN,
    margin: int = GRID_MARGIN,
) -> GridLayout | None:
    """Return the widest multi-column layout that fits ``max_width``, if any."""
    if len(cells) < 2 or max_width <= 0:
        return None
    if max(cell.width for cell in cells) > max_width:
        return None

    for num_columns in range(_max_columns(cells, max_width, margin), 1, -1):
        layout = _layout(cells, num_columns, direction)
        if len(layout.widths) < 2:
            continue
        if layout.total_width(margin) <= max_width:
            return layout
    return None


def one_per_line(items: Iterable[str]) -> str:
    return "".join(f"{item}\n" for item in items)


def layout_grid(
    items: Sequence[str],
    max_width: int | None,
    direction: Direction = Direction.DOWN,
    margin: int = GRID_MARGIN,
) -> str:
    """Return ``items`` packed into a grid, or one per line when no grid fits.

    ``max_width`` of ``None`` means the terminal width is unknown.
    """
    if max_width is None:
        return one_per_line(items)
    layout = fit_into_width([GridCell.of(item) for item in items], max_width, direction, margin)
    if layout is None:
        return one_per_line(items)
    return layout.render(margin)
