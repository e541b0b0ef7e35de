"""Git status lookup for listing entries.

Runs ``git status --porcelain`` once per repository and maps each changed
path to a short status code (``M``, ``A``, ``?``, ``AM`` ...). Every failure
degrades to "no status" so listing never aborts on git problems.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 2.0
UNTRACKED = "?"

_STAGED_CODES = {"A", "M", "D", "R", "C"}
_WORKTREE_CODES = {"M", "D", "A"}


class StatusProvider(Protocol):
    def status_for(self, path: Path) -> str: ...


def _run_git(cwd: Path, args: list[str], timeout_seconds: float) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(
            ["git", "-C", str(cwd), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("git %s failed in %s: %s", " ".join(args), cwd, exc)
        return None


def resolve_repo_root(path: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> Path | None:
    """Return the work-tree root containing ``path``, or ``None`` outside a repository."""
    proc = _run_git(path, ["rev-parse", "--show-toplevel"], timeout_seconds)
    if proc is None or proc.returncode != 0:
        return None
    top = proc.stdout.strip()
    if not top:
        return None
    return Path(top).resolve()


def iter_porcelain_records(output: str) -> list[tuple[str, str]]:
    """Split ``git status --porcelain=v1 -z`` output into ``(XY, path)`` pairs."""
    records: list[tuple[str, str]] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if not token:
            continue
        if len(token) < 4 or token[2] != " ":
            continue

        status = token[:2]
        path_text = token[3:]
        records.append((status, path_text))

        # For renamed/copied entries, porcelain -z appends an extra token
        # containing the source path; the first path token is the destination.
        if "R" in status or "C" in status:
            index += 1

    return records


def short_status_code(xy: str) -> str:
    """Map a porcelain ``XY`` pair to the compact code shown in listings.

    The staged letter comes first, followed by the work-tree letter; an
    unchanged side contributes nothing.
    """
    if xy == "??":
        return UNTRACKED
    if xy == "!!" or len(xy) != 2:
        return ""
    staged, worktree = xy[0], xy[1]
    code = ""
    if staged in _STAGED_CODES:
        code += staged
    if worktree in _WORKTREE_CODES:
        code += worktree
    return code


def _anchor(path: Path) -> Path:
    """Resolve the parent directory only, so symlink entries keep their own path."""
    return path.parent.resolve() / path.name


class GitStatusProvider:
    """Lazily loaded status map for one repository."""

    def __init__(self, repo_root: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> None:
        self.repo_root = repo_root
        self.timeout_seconds = timeout_seconds
        self._statuses: dict[Path, str] | None = None

    def _load(self) -> dict[Path, str]:
        statuses: dict[Path, str] = {}
        proc = _run_git(
            self.repo_root,
            ["status", "--porcelain=v1", "-z", "--untracked-files=normal"],
            self.timeout_seconds,
        )
        if proc is None or proc.returncode != 0:
            logger.info("git status unavailable for %s; continuing without status", self.repo_root)
            return statuses
        for xy, rel_path in iter_porcelain_records(proc.stdout):
            code = short_status_code(xy)
            if not code or not rel_path:
                continue
            statuses[_anchor(self.repo_root / rel_path.rstrip("/"))] = code
        return statuses

    def status_for(self, path: Path) -> str:
        if self._statuses is None:
            self._statuses = self._load()
        if not self._statuses:
            return ""
        try:
            target = _anchor(path)
        except OSError:
            return ""
        return self._statuses.get(target, "")


def open_status_provider(path: Path) -> GitStatusProvider | None:
    """Return a provider for the repository containing ``path``, if any."""
    repo_root = resolve_repo_root(path)
    if repo_root is None:
        logger.debug("%s is not inside a git repository", path)
        return None
    return GitStatusProvider(repo_root)
