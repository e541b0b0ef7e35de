"""Cell text for listing rows: names, sizes, times, permissions, git codes.

Every formatter takes the active ``Palette`` so color can be switched off
without changing the visible text.
"""

from __future__ import annotations

import stat
import re
from datetime import datetime

from ..colors import PLAIN, Palette
from ..entries.types import FileEntry
from .truncate import SYMLINK_ARROW, truncate_middle, truncate_symlink_parts

DEFAULT_NAME_MAX_WIDTH = 50

_SIZE_UNITS = ("KB", "MB", "GB", "TB", "PB", "EB")
_SOURCE_EXTENSIONS = {"go", "rs", "py", "js", "ts", "jsx", "tsx"}
_DOC_EXTENSIONS = {"md", "txt", "rst"}
_CONFIG_EXTENSIONS = {"yml", "yaml", "json", "toml", "ini"}

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_MONTH = 30 * _DAY
_YEAR = 365 * _DAY

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def format_size(size: int, is_dir: bool, palette: Palette = PLAIN) -> str:
    """Human-readable size with one decimal and binary (1024) units."""
    if is_dir:
        return palette.paint("-", "cyan")
    if size < 1024:
        return palette.paint(f"{size} B", "bright_white")

    divisor = 1024
    exponent = 0
    scaled = size // 1024
    while scaled >= 1024 and exponent < len(_SIZE_UNITS) - 1:
        divisor *= 1024
        exponent += 1
        scaled //= 1024
    return palette.paint(f"{size / divisor:.1f} {_SIZE_UNITS[exponent]}", "bright_white")


def format_exact_time(moment: datetime) -> str:
    return f"{moment:%b} {moment.day}, {moment:%y %H:%M}"


def format_modified(moment: datetime, now: datetime, show_exact: bool = False, palette: Palette = PLAIN) -> str:
    """Relative age such as ``"5 minutes ago"``, or the exact timestamp."""
    if show_exact:
        return palette.paint(format_exact_time(moment), "bright_white")

    seconds = (now - moment).total_seconds()
    if seconds < 0:
        return palette.paint("future", "blue")
    if seconds < _MINUTE:
        return palette.paint(f"{int(seconds)} seconds ago", "green")
    if seconds < _HOUR:
        return palette.paint(f"{int(seconds // _MINUTE)} minutes ago", "green")
    if seconds < _DAY:
        return palette.paint(f"{int(seconds // _HOUR)} hours ago", "yellow")
    if seconds < _WEEK:
        return palette.paint(f"{int(seconds // _DAY)} days ago", "bright_yellow")
    if seconds < _MONTH:
        return palette.paint(f"{int(seconds // _WEEK)} weeks ago", "red")
    if seconds < _YEAR:
        return palette.paint(f"{int(seconds // _MONTH)} months ago", "bright_red")
    return palette.paint(f"{int(seconds // _YEAR)} years ago", "bright_black")


def _type_char(mode: int, palette: Palette) -> str:
    if stat.S_ISDIR(mode):
        return palette.paint("d", "cyan", "bold")
    if stat.S_ISLNK(mode):
        return palette.paint("l", "magenta", "bold")
    if stat.S_ISCHR(mode):
        return palette.paint("c", "yellow", "bold")
    if stat.S_ISBLK(mode):
        return palette.paint("b", "yellow", "bold")
    if stat.S_ISFIFO(mode):
        return palette.paint("p", "yellow", "bold")
    if stat.S_ISSOCK(mode):
        return palette.paint("s", "yellow", "bold")
    return palette.paint("-", "cyan")


def format_permissions(mode: int, use_octal: bool = False, palette: Palette = PLAIN) -> str:
    """``ls -l`` style permission string, or zero-padded octal.

    Setuid/setgid show as ``s``/``S`` in the owner/group execute slot and the
    sticky bit as ``t``/``T`` in the other execute slot.
    """
    perm = stat.S_IMODE(mode)
    if use_octal:
        return palette.paint(f"{perm:04o}", "bright_white")

    specials = (stat.S_ISUID, stat.S_ISGID, stat.S_ISVTX)
    parts = [_type_char(mode, palette)]
    for group in range(3):
        shift = 6 - group * 3
        bits = (perm >> shift) & 0o7
        parts.append(palette.paint("r", "green", "bold") if bits & 0o4 else palette.paint("-", "bright_black"))
        parts.append(palette.paint("w", "yellow", "bold") if bits & 0o2 else palette.paint("-", "bright_black"))
        executable = bool(bits & 0o1)
        if perm & specials[group]:
            letter = "t" if group == 2 else "s"
            style = "red" if group == 2 else "magenta"
            parts.append(palette.paint(letter if executable else letter.upper(), style, "bold"))
        elif executable:
            parts.append(palette.paint("x", "red", "bold"))
        else:
            parts.append(palette.paint("-", "bright_black"))
    return "".join(parts)


def format_git_status(status: str, palette: Palette = PLAIN) -> str:
    if not status:
        return ""
    if status in ("?", "??"):
        return palette.paint(status, "red", "bold")
    if status in ("A", "AM"):
        return palette.paint(status, "green", "bold")
    if status in ("M", " M", "MM"):
        return palette.paint(status, "yellow", "bold")
    if status in ("D", " D"):
        return palette.paint(status, "red")
    if status in ("R", "C"):
        return palette.paint(status, "cyan", "bold")
    return palette.paint(status, "yellow")


def format_owner(name: str | None, palette: Palette = PLAIN) -> str:
    return palette.paint(name or "", "white")


def sanitize_name(text: str) -> str:
    """Escape C0, DEL and C1 control characters as ``\\xNN``."""
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group()):02x}", text)


def _name_style(entry: FileEntry) -> tuple[str, ...]:
    if entry.is_dir:
        return ("blue", "bold")
    if entry.is_executable:
        return ("red",)
    if entry.is_hidden:
        return ("yellow",)
    extension = entry.extension.lower()
    if extension in _SOURCE_EXTENSIONS:
        return ("green",)
    if extension in _DOC_EXTENSIONS:
        return ("yellow",)
    if extension in _CONFIG_EXTENSIONS:
        return ("magenta",)
    return ("white",)


def format_name(
    entry: FileEntry,
    max_width: int = DEFAULT_NAME_MAX_WIDTH,
    palette: Palette = PLAIN,
    link_target: str | None = None,
) -> str:
    """Colored, width-limited name cell.

    Symlinks whose ``link_target`` is known render as ``name -> target`` with
    both sides sharing ``max_width``.
    """
    if max_width <= 0:
        max_width = DEFAULT_NAME_MAX_WIDTH
    name = sanitize_name(entry.name)

    if entry.is_symlink:
        if link_target is None:
            return palette.paint(truncate_middle(name, max_width), "magenta", "bold")
        name, target = truncate_symlink_parts(name, sanitize_name(link_target), max_width)
        painted = palette.paint(name, "magenta", "bold")
        if not target:
            return painted
        return painted + SYMLINK_ARROW + palette.paint(target, "bright_black")

    return palette.paint(truncate_middle(name, max_width), *_name_style(entry))
