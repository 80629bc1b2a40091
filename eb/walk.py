"""Resolve command-line paths into listings, trees, and printed files.

Directories are scanned, filtered, and sorted here, then handed to the
``listing`` formatters as finished batches. Files go to the printer.
Unreadable paths are reported and skipped; the run's exit status records
whether anything failed.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from .listing.columns import FieldSelection, LongListing
from .listing.entry import Entry, UnsupportedFieldError, visible_entries
from .listing.grid import GRID_MARGIN, LONG_GRID_MARGIN, Direction, layout_grid, one_per_line
from .printer import PrintOptions, print_file
from .sorting import sort_entries
from .terminal import terminal_width

LOGGER = logging.getLogger(__name__)

UNLIMITED_DEPTH = -1
TREE_BRANCH = "├─ "
TREE_LAST_BRANCH = "└─ "
TREE_PIPE = "│  "
TREE_SPACE = "   "


@dataclass(frozen=True)
class ListOptions:
    """How directory listings are filtered, traversed, and laid out."""

    long: bool = False
    grid: bool = False
    oneline: bool = False
    across: bool = False
    recurse: bool = False
    tree: bool = False
    show_hidden: bool = False
    list_dirs: bool = False
    only_dirs: bool = False
    level: int = UNLIMITED_DEPTH
    group_directories_first: bool = False
    selection: FieldSelection = field(default_factory=FieldSelection)

    @property
    def direction(self) -> Direction:
        return Direction.ACROSS if self.across else Direction.DOWN

    def descends_past(self, depth: int) -> bool:
        """Return whether children of a directory at ``depth`` should be listed."""
        return self.level == UNLIMITED_DEPTH or depth < self.level


def scan_directory(directory: Path) -> list[Entry]:
    """Return an entry for every child of ``directory`` in scan order.

    Symlinks are followed; a dangling link is described by the link itself.
    """
    entries: list[Entry] = []
    with os.scandir(directory) as children:
        for child in children:
            try:
                st = child.stat()
            except OSError:
                st = child.stat(follow_symlinks=False)
            entries.append(Entry.from_stat(child.name, st))
    return entries


class Lister:
    """Write listings and file contents for a set of paths."""

    def __init__(
        self,
        options: ListOptions,
        print_options: PrintOptions | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.options = options
        self.print_options = print_options or PrintOptions()
        self.out = out
        self.err = err
        self.failed = False

    def _write(self, text: str) -> None:
        (self.out or sys.stdout).write(text)

    def _report(self, path: Path | str, exc: Exception) -> None:
        self.failed = True
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        LOGGER.debug("failed to list %s", path, exc_info=True)
        (self.err or sys.stderr).write(f"eb: {path}: {reason}\n")

    def run(self, paths: list[str]) -> int:
        """List or print every path and return the process exit status."""
        targets = [Path(path) for path in paths] or [Path(".")]
        if self.options.list_dirs:
            self._list_paths_as_entries(targets)
        else:
            show_headers = len(targets) > 1
            for idx, target in enumerate(targets):
                if show_headers:
                    if idx:
                        self._write("\n")
                    self._write(f"{target}:\n")
                self._handle_path(target)
        return 1 if self.failed else 0

    def _handle_path(self, path: Path) -> None:
        try:
            if path.is_dir():
                if self.options.tree:
                    self._write_tree(path)
                else:
                    self.list_directory(path)
            elif path.exists():
                print_file(path, self.print_options, out=self.out)
            else:
                raise FileNotFoundError(2, "No such file or directory", str(path))
        except (OSError, UnsupportedFieldError) as exc:
            self._report(path, exc)

    def _list_paths_as_entries(self, paths: list[Path]) -> None:
        entries: list[Entry] = []
        for path in paths:
            try:
                entries.append(Entry.from_path(path, name=str(path)))
            except OSError as exc:
                self._report(path, exc)
        try:
            self.emit(entries)
        except UnsupportedFieldError as exc:
            self._report(exc.entry_name, exc)

    def _prepare(self, entries: list[Entry]) -> list[Entry]:
        entries = visible_entries(entries, self.options.show_hidden)
        if self.options.only_dirs:
            entries = [entry for entry in entries if entry.is_dir]
        return sort_entries(entries, self.options.group_directories_first)

    def list_directory(self, directory: Path, depth: int = 1) -> None:
        """List ``directory`` and, when recursing, each subdirectory after it."""
        entries = self._prepare(scan_directory(directory))
        self.emit(entries)

        if not (self.options.recurse and self.options.descends_past(depth)):
            return
        for entry in entries:
            child = directory / entry.name
            if not entry.is_dir or child.is_symlink():
                continue
            self._write(f"\n{child}:\n")
            try:
                self.list_directory(child, depth + 1)
            except (OSError, UnsupportedFieldError) as exc:
                self._report(child, exc)

    def emit(self, entries: list[Entry]) -> None:
        """Write one already-filtered, already-sorted batch."""
        options = self.options
        if options.long:
            items = LongListing(entries, options.selection).lines()
            if options.grid:
                self._write(layout_grid(items, terminal_width(), options.direction, LONG_GRID_MARGIN))
            else:
                self._write(one_per_line(items))
            return

        names = [entry.name for entry in entries]
        if options.oneline:
            self._write(one_per_line(names))
        else:
            self._write(layout_grid(names, terminal_width(), options.direction, GRID_MARGIN))

    def _write_tree(self, root: Path) -> None:
        self._write(f"{root}\n")
        self._walk_tree(root, "", 1)

    def _walk_tree(self, directory: Path, prefix: str, depth: int) -> None:
        if self.options.level != UNLIMITED_DEPTH and depth > self.options.level:
            return
        try:
            entries = scan_directory(directory)
        except OSError as exc:
            self._report(directory, exc)
            return
        entries = self._prepare(entries)
        for idx, entry in enumerate(entries):
            last = idx == len(entries) - 1
            self._write(f"{prefix}{TREE_LAST_BRANCH if last else TREE_BRANCH}{entry.name}\n")
            child = directory / entry.name
            if entry.is_dir and not child.is_symlink():
                self._walk_tree(child, prefix + (TREE_SPACE if last else TREE_PIPE), depth + 1)
