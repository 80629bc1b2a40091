"""Decode POSIX permission bits into the long view permissions column."""

from __future__ import annotations

PERM_CHARS = ("r", "w", "x")
NO_PERM = "-"
DIRECTORY_CHAR = "d"
OTHER_CHAR = "."
PERMISSION_BITS = 9


def format_permissions(mode: int, is_dir: bool) -> str:
    """Return ``type + rwxrwxrwx`` for the low nine bits of ``mode``.

    Bit 8 (owner read) maps to position 1, bit 0 (other execute) to position 9.
    """
    out = [DIRECTORY_CHAR if is_dir else OTHER_CHAR]
    for position in range(PERMISSION_BITS):
        bit = PERMISSION_BITS - 1 - position
        out.append(PERM_CHARS[position % 3] if mode & (1 << bit) else NO_PERM)
    return "".join(out)
