"""Integer and byte-size rendering for the long view size column.

Human-readable sizes keep two significant figures below ten units and round
to the nearest whole unit above that. Scaling only advances a prefix when
the running value is strictly greater than the divisor, so exactly 1000
bytes (decimal) or 1024 bytes (binary) stay unprefixed.
"""

from __future__ import annotations

import math

from .entry import Entry

PREFIXES = ("k", "M", "G", "T", "P", "E")
BINARY_MARKER = "i"
DIRECTORY_SIZE = "-"
DECIMAL_DIVISOR = 1000
BINARY_DIVISOR = 1024


def format_with_separator(n: int) -> str:
    """Render ``n`` in base 10 with a comma every three digits from the right."""
    if n < 0:
        raise ValueError(f"expected a non-negative integer, got {n}")
    digits = str(n)
    groups: list[str] = []
    while len(digits) > 3:
        groups.append(digits[-3:])
        digits = digits[:-3]
    groups.append(digits)
    return ",".join(reversed(groups))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _scaled_text(value: float) -> str:
    if value >= 10:
        return format_with_separator(_round_half_up(value))
    whole = int(math.floor(value))
    tenths = _round_half_up((value - whole) * 10)
    if tenths == 10:
        # 9.97 carries to "10"; 1.96 carries to "2.0"
        whole += 1
        if whole >= 10:
            return format_with_separator(whole)
        tenths = 0
    return f"{format_with_separator(whole)}.{tenths}"


def format_human_size(byte_count: int, use_binary: bool) -> str:
    """Render ``byte_count`` with a decimal (k, M, ...) or binary (ki, Mi, ...) prefix."""
    if byte_count < 0:
        raise ValueError(f"expected a non-negative byte count, got {byte_count}")
    divisor = BINARY_DIVISOR if use_binary else DECIMAL_DIVISOR
    value = float(byte_count)
    order = 0
    while value > divisor and order < len(PREFIXES):
        value /= divisor
        order += 1

    if order == 0:
        return format_with_separator(byte_count)

    suffix = PREFIXES[order - 1] + (BINARY_MARKER if use_binary else "")
    return _scaled_text(value) + suffix


def format_size_field(entry: Entry, exact_bytes: bool, use_binary: bool) -> str:
    """Return the size column text for ``entry``.

    Directories and non-regular files always show a dash.
    """
    if not entry.is_file:
        return DIRECTORY_SIZE
    if exact_bytes:
        return format_with_separator(entry.size)
    return format_human_size(entry.size, use_binary)
