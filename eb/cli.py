"""Command-line front door for eb.

Parses options (with config-file defaults prepended), builds the listing
and printing options once, then hands every path to the ``Lister``.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .config import load_default_args, load_style
from .listing.columns import FieldSelection
from .printer import PagingMode, PrintOptions, WrapMode, parse_line_range
from .terminal import stdout_is_tty
from .walk import UNLIMITED_DEPTH, Lister, ListOptions

FILE_PRINT_HEADING = "File Printing Options"
DIR_LIST_FORMAT_HEADING = "Directory List Formatting Options"
DIR_LIST_FILT_SORT_HEADING = "Directory List Filtering and Sorting Options"
DIR_LIST_LONG_VIEW_HEADING = "Directory List Long View Options"

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _level(value: str) -> int:
    """argparse type for recursion depth; negative means unlimited."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed == 0:
        raise argparse.ArgumentTypeError("level must be >= 1, or negative for no limit")
    return UNLIMITED_DEPTH if parsed < 0 else parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eb",
        description="eb = exa + bat. Intuitively list directory contents or concatenate files.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="FILES",
        help="Directories and/or files to list or print. No arguments lists the current directory.",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for file highlighting.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--debug", action="store_true", help="Log debug messages to stderr.")

    printing = parser.add_argument_group(FILE_PRINT_HEADING)
    printing.add_argument("-A", "--show-all", action="store_true", help="Show non-printable characters.")
    printing.add_argument("-F", "--file-name", default="", metavar="NAME", help="Specify name to display for the file.")
    printing.add_argument("-N", "--numbers", action="store_true", help="Show line numbers.")
    printing.add_argument(
        "-P",
        "--paging",
        choices=[mode.value for mode in PagingMode],
        default=PagingMode.AUTO.value,
        metavar="WHEN",
        help="Specify when to use the pager (auto, never, always).",
    )
    printing.add_argument(
        "-r",
        "--line-range",
        type=parse_line_range,
        default="-1:-1",
        metavar="N:M",
        help="Only print the lines from N to M.",
    )
    printing.add_argument(
        "-w",
        "-W",
        "--wrap",
        choices=[mode.value for mode in WrapMode],
        default=WrapMode.AUTO.value,
        metavar="MODE",
        help="Specify text wrapping mode (auto, never, character).",
    )

    formatting = parser.add_argument_group(DIR_LIST_FORMAT_HEADING)
    formatting.add_argument(
        "-1", "--oneline", dest="layout", action="store_const", const="oneline", help="Display one item per line."
    )
    formatting.add_argument(
        "-G", "--grid", dest="layout", action="store_const", const="grid", help="Display items in a grid."
    )
    formatting.add_argument("-l", "--long", action="store_true", help="Display extended file metadata as a table.")
    formatting.add_argument("-R", "--recurse", action="store_true", help="Recurse into directories.")
    formatting.add_argument("-T", "--tree", action="store_true", help="Recurse into directories as a tree.")
    formatting.add_argument("-x", "-X", "--across", action="store_true", help="Sort the grid across.")

    filtering = parser.add_argument_group(DIR_LIST_FILT_SORT_HEADING)
    filtering.add_argument("-a", "--all", action="store_true", help="Show hidden files.")
    filtering.add_argument(
        "-d", "--list-dirs", action="store_true", help="List directories as files; don't list their contents."
    )
    filtering.add_argument("-D", "--only-dirs", action="store_true", help="List directories only; don't list files.")
    filtering.add_argument(
        "-L", "--level", type=_level, default=UNLIMITED_DEPTH, metavar="DEPTH", help="Set the level of recursion."
    )
    filtering.add_argument(
        "-q", "-Q", "--group-directories-first", action="store_true", help="List all directories before files."
    )

    long_view = parser.add_argument_group(DIR_LIST_LONG_VIEW_HEADING)
    long_view.add_argument(
        "-b",
        "--binary",
        dest="size_style",
        action="store_const",
        const="binary",
        help="List file sizes with binary prefixes.",
    )
    long_view.add_argument(
        "-B", "--bytes", dest="size_style", action="store_const", const="bytes", help="List file sizes in bytes."
    )
    long_view.add_argument("-c", "-C", "--changed", action="store_true", help="Use the changed timestamp field.")
    long_view.add_argument("-g", "--group", action="store_true", help="List each file's group.")
    long_view.add_argument("-H", "--header", action="store_true", help="Show a header for each column.")
    long_view.add_argument("-i", "-I", "--inode", action="store_true", help="List each file's inode number.")
    long_view.add_argument("-k", "-K", "--links", action="store_true", help="List each file's number of hard links.")
    long_view.add_argument("-m", "-M", "--modified", action="store_true", help="Use the modified timestamp field.")
    long_view.add_argument("-n", "--numeric", action="store_true", help="List numeric user and group IDs.")
    long_view.add_argument(
        "-S", "--blocks", action="store_true", help="List each file's number of file system blocks."
    )
    long_view.add_argument("-u", "--accessed", action="store_true", help="Use the accessed timestamp field.")
    long_view.add_argument("-U", "--created", action="store_true", help="Use the created timestamp field.")
    long_view.add_argument("-o", "-O", "--no-permissions", action="store_true", help="Hide the permissions field.")
    long_view.add_argument("-z", "-Z", "--no-filesize", action="store_true", help="Hide the filesize field.")
    long_view.add_argument("-y", "-Y", "--no-user", action="store_true", help="Hide the user field.")
    long_view.add_argument("-t", "--no-time", action="store_true", help="Hide the time field.")
    parser.set_defaults(layout=None, size_style="decimal")
    return parser


def configure_logging(debug: bool) -> None:
    if debug or os.environ.get("EB_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, stream=sys.stderr)
    else:
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT, stream=sys.stderr)


def list_options_from_args(args: argparse.Namespace) -> ListOptions:
    return ListOptions(
        long=args.long,
        grid=args.layout == "grid",
        oneline=args.layout == "oneline",
        across=args.across,
        recurse=args.recurse,
        tree=args.tree,
        show_hidden=args.all,
        list_dirs=args.list_dirs,
        only_dirs=args.only_dirs,
        level=args.level,
        group_directories_first=args.group_directories_first,
        selection=FieldSelection.from_args(args),
    )


def print_options_from_args(args: argparse.Namespace) -> PrintOptions:
    return PrintOptions(
        numbers=args.numbers,
        line_range=args.line_range,
        wrap=WrapMode(args.wrap),
        show_all=args.show_all,
        file_name=args.file_name,
        paging=PagingMode(args.paging),
        color=not args.no_color and not args.show_all and stdout_is_tty(),
        style=args.style or load_style(),
    )


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, then list or print every requested path.

    Returns the process exit status: 0 when every path succeeded, 1 when
    any path was missing or unreadable.
    """
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args([*load_default_args(), *argv])
    configure_logging(args.debug)

    lister = Lister(list_options_from_args(args), print_options_from_args(args))
    return lister.run(args.paths)


if __name__ == "__main__":
    raise SystemExit(main())
