"""Include/exclude glob filtering and hidden-entry suppression.

Patterns use ``filepath.Match`` grammar: ``*`` and ``?`` never cross ``/``,
``[^...]`` negates a class, and ``\\`` escapes the next character both
inside and outside classes.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .entries.types import FileEntry


def _class_char(pattern: str, i: int) -> tuple[str | None, int]:
    """Read one class character at ``i``; ``None`` for a bare ``-``/``]`` or a dangling escape."""
    if i >= len(pattern) or pattern[i] in "-]":
        return None, i
    if pattern[i] == "\\":
        i += 1
        if i >= len(pattern):
            return None, i
    return pattern[i], i + 1


def _translate_class(pattern: str, i: int) -> tuple[str | None, int]:
    """Translate the class body starting after ``[``; returns the regex and the index past ``]``."""
    negate = i < len(pattern) and pattern[i] == "^"
    if negate:
        i += 1

    ranges: list[tuple[str, str]] = []
    while True:
        if i >= len(pattern):
            return None, i
        if pattern[i] == "]" and ranges:
            i += 1
            break
        lo, i = _class_char(pattern, i)
        if lo is None:
            return None, i
        hi = lo
        if i < len(pattern) and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
            if hi is None:
                return None, i
        ranges.append((lo, hi))

    # Reversed ranges are legal but match nothing.
    body = "".join(
        re.escape(lo) if lo == hi else f"{re.escape(lo)}-{re.escape(hi)}"
        for lo, hi in ranges
        if lo <= hi
    )
    if negate:
        return (f"[^{body}]" if body else "."), i
    return (f"[{body}]" if body else "(?!)"), i


def _translate(pattern: str) -> str | None:
    """Translate a glob into a regex body, or ``None`` when the pattern is malformed."""
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        i += 1
        if ch == "*":
            parts.append("[^/]*")
        elif ch == "?":
            parts.append("[^/]")
        elif ch == "\\":
            if i >= len(pattern):
                return None
            parts.append(re.escape(pattern[i]))
            i += 1
        elif ch == "[":
            translated, i = _translate_class(pattern, i)
            if translated is None:
                return None
            parts.append(translated)
        else:
            parts.append(re.escape(ch))
    return "".join(parts)


def _compile(pattern: str) -> re.Pattern[str] | None:
    """Compile a glob; malformed patterns compile to ``None``."""
    translated = _translate(pattern)
    if translated is None:
        return None
    return re.compile(translated + r"\Z", re.DOTALL)


class EntryFilter:
    """Glob filter matched against base names, case-sensitively.

    A pattern that cannot be compiled never matches.
    """

    def __init__(self, include_patterns: Iterable[str] = (), exclude_patterns: Iterable[str] = ()) -> None:
        self.include_patterns = tuple(include_patterns)
        self.exclude_patterns = tuple(exclude_patterns)
        self._include = [_compile(pattern) for pattern in self.include_patterns]
        self._exclude = [_compile(pattern) for pattern in self.exclude_patterns]

    @property
    def has_include_patterns(self) -> bool:
        return bool(self.include_patterns)

    def should_include(self, name: str) -> bool:
        return any(regex is not None and regex.match(name) for regex in self._include)

    def should_exclude(self, name: str) -> bool:
        return any(regex is not None and regex.match(name) for regex in self._exclude)

    def apply(self, entries: Iterable[FileEntry], show_hidden: bool) -> list[FileEntry]:
        filtered: list[FileEntry] = []
        for entry in entries:
            if not show_hidden and entry.is_hidden:
                continue
            if self.should_exclude(entry.name):
                continue
            if self.include_patterns and not self.should_include(entry.name):
                continue
            filtered.append(entry)
        return filtered
