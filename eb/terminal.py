"""Terminal introspection used to size grids and wrap printed files.

Every query answers ``None`` instead of guessing when no terminal is
attached; callers fall back to one item per line or unwrapped output.
"""

from __future__ import annotations

import os
import sys


def _env_dimension(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def _stdout_size() -> os.terminal_size | None:
    try:
        return os.get_terminal_size(sys.stdout.fileno())
    except (AttributeError, OSError, ValueError):
        return None


def terminal_width() -> int | None:
    """Return usable terminal columns, honoring a positive ``COLUMNS`` override."""
    override = _env_dimension("COLUMNS")
    if override is not None:
        return override
    size = _stdout_size()
    if size is None or size.columns <= 0:
        return None
    return size.columns


def terminal_height() -> int | None:
    """Return terminal rows, honoring a positive ``LINES`` override."""
    override = _env_dimension("LINES")
    if override is not None:
        return override
    size = _stdout_size()
    if size is None or size.lines <= 0:
        return None
    return size.lines


def stdout_is_tty() -> bool:
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False
