"""Command-line front door for lu.

Parses flags into a ``ListingConfig``, resolves persisted defaults, and runs
the traversal engine with interrupt signals routed to a cancellation token.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

from . import __version__
from .cancellation import CancellationToken, listen_for_interrupt
from .colors import COLOR_MODES
from .config import BORDER_STYLES, LayoutMode, ListingConfig, split_patterns
from .errors import LuhutError
from .settings import load_border_style, load_color_mode, save_border_style, save_color_mode
from .sorting import SortMode
from .traversal import Lister

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    # -h lists hidden files, so help is only available as --help.
    parser = argparse.ArgumentParser(
        prog="lu",
        description="List directory contents as an adaptive table or tree.",
        add_help=False,
    )
    parser.add_argument("path", nargs="?", default=".", help="Directory to list. Defaults to the current directory.")
    parser.add_argument("--help", action="help", help="Show this help message and exit.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sorting = parser.add_argument_group("sorting")
    sorting.add_argument("-t", "--time", action="store_true", help="Sort by modification time, newest first.")
    sorting.add_argument("-S", "--size", action="store_true", help="Sort by size, largest first.")
    sorting.add_argument("-X", "--extension", action="store_true", help="Sort by file extension.")
    sorting.add_argument("-r", "--reverse", action="store_true", help="Reverse the sort order.")

    columns = parser.add_argument_group("columns")
    columns.add_argument("-g", "--git", action="store_true", help="Show git status.")
    columns.add_argument("-h", "--hidden", action="store_true", help="Show hidden files.")
    columns.add_argument("-u", "--user", action="store_true", help="Show owning user and group.")
    columns.add_argument("-T", "--exact-time", action="store_true", help="Show exact modification time.")
    columns.add_argument("-o", "--octal", action="store_true", help="Show permissions in octal.")

    layout = parser.add_argument_group("layout")
    layout.add_argument("-F", "--tree", action="store_true", help="Draw a tree instead of tables.")
    layout.add_argument("-R", "--recursive", action="store_true", help="List subdirectories recursively.")
    layout.add_argument(
        "-L",
        "--max-depth",
        type=int,
        default=0,
        metavar="N",
        help="Maximum recursion depth (default: 30).",
    )
    layout.add_argument("--width", type=_positive_int, default=None, metavar="N", help="Override the terminal width.")
    layout.add_argument("--border", choices=BORDER_STYLES, default=None, help="Table border style.")
    layout.add_argument("--color", choices=COLOR_MODES, default=None, help="When to use color (default: auto).")

    filters = parser.add_argument_group("filtering")
    filters.add_argument(
        "-i",
        "--include",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Only list names matching PATTERN (repeatable, comma separated).",
    )
    filters.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Skip names matching PATTERN (repeatable, comma separated).",
    )

    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Remember the given --border and --color values for later runs.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log diagnostics to stderr.")
    return parser


def config_from_args(args: argparse.Namespace) -> tuple[ListingConfig, str]:
    """Build the listing config and the directory to list from parsed flags."""
    path = args.path
    include = split_patterns(args.include)
    if include and os.path.exists(path) and not os.path.isdir(path):
        # A file operand next to -i joins the include list; list the cwd instead.
        include = include + (path,)
        path = "."

    config = ListingConfig(
        sort_mode=SortMode.from_flags(args.size, args.extension, args.time),
        reverse=args.reverse,
        show_git=args.git,
        show_hidden=args.hidden,
        show_user=args.user,
        show_exact_time=args.exact_time,
        show_octal=args.octal,
        layout=LayoutMode.from_flags(tree=args.tree, recursive=args.recursive),
        max_depth=args.max_depth,
        include_patterns=include,
        exclude_patterns=split_patterns(args.exclude),
        color_mode=args.color or load_color_mode() or "auto",
        border_style=args.border or load_border_style() or "single",
        terminal_width=args.width,
    )
    return config.validate(), path


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments and list the requested directory.

    Invalid targets and options exit with a message and non-zero status.
    An interrupted listing exits normally after printing its notice.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config, path = config_from_args(args)
    except LuhutError as exc:
        raise SystemExit(f"lu: {exc}") from exc

    if args.save_defaults:
        if args.border:
            save_border_style(args.border)
        if args.color:
            save_color_mode(args.color)

    lister = Lister(config)
    with listen_for_interrupt(CancellationToken()) as token:
        try:
            outcome = lister.list(path, token)
        except LuhutError as exc:
            raise SystemExit(f"lu: {exc}") from exc
    logger.debug("listing finished: %s", outcome.value)


if __name__ == "__main__":
    main()
