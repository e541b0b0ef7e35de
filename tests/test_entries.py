"""Tests for the entry model and the local filesystem capability.

Covers derived predicates, immutability, and per-directory collection with
git and ownership metadata attached.
"""

from __future__ import annotations

import dataclasses
import os
import stat
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from luhut.entries import (
    UNKNOWN_OWNER,
    FileEntry,
    LocalFilesystem,
    RawEntry,
    collect_entries,
    read_link_target,
)
from luhut.entries import fs as fs_module

MTIME = datetime(2024, 1, 1, 12, 0, 0)


def _entry(name: str, mode: int = stat.S_IFREG | 0o644, is_dir: bool = False) -> FileEntry:
    return FileEntry(name=name, path=Path("/data") / name, size=0, mode=mode, modified_at=MTIME, is_dir=is_dir)


class FileEntryTests(unittest.TestCase):
    def test_hidden_is_derived_from_name(self) -> None:
        self.assertTrue(_entry(".env").is_hidden)
        self.assertFalse(_entry("env").is_hidden)

    def test_hidden_cannot_be_passed_in(self) -> None:
        with self.assertRaises(TypeError):
            FileEntry(  # type: ignore[call-arg]
                name="x", path=Path("x"), size=0, mode=0, modified_at=MTIME, is_dir=False, is_hidden=True
            )

    def test_entries_are_frozen(self) -> None:
        entry = _entry("a.txt")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            entry.name = "b.txt"  # type: ignore[misc]

    def test_extension_uses_text_after_last_dot(self) -> None:
        self.assertEqual(_entry("archive.tar.gz").extension, "gz")
        self.assertEqual(_entry("Makefile").extension, "")
        self.assertEqual(_entry(".bashrc").extension, "bashrc")

    def test_mode_predicates(self) -> None:
        self.assertTrue(_entry("run.sh", stat.S_IFREG | 0o755).is_executable)
        self.assertFalse(_entry("notes.txt").is_executable)
        self.assertTrue(_entry("link", stat.S_IFLNK | 0o777).is_symlink)

    def test_with_git_status_returns_new_entry(self) -> None:
        entry = _entry("a.txt")
        updated = entry.with_git_status("M")
        self.assertEqual(updated.git_status, "M")
        self.assertEqual(entry.git_status, "")
        self.assertFalse(updated.is_hidden)

    def test_from_raw_joins_directory_and_name(self) -> None:
        raw = RawEntry(name="main.py", size=12, mode=stat.S_IFREG | 0o644, modified_at=MTIME, is_dir=False)
        entry = FileEntry.from_raw(Path("/src"), raw)
        self.assertEqual(entry.path, Path("/src/main.py"))
        self.assertEqual(entry.size, 12)


class LocalFilesystemTests(unittest.TestCase):
    def test_read_directory_reports_children_without_following_links(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "file.txt").write_text("hello", encoding="utf-8")
            (root / "sub").mkdir()
            os.symlink(root / "sub", root / "link")

            children = {raw.name: raw for raw in LocalFilesystem().read_directory(root)}

        self.assertEqual(set(children), {"file.txt", "sub", "link"})
        self.assertEqual(children["file.txt"].size, 5)
        self.assertFalse(children["file.txt"].is_dir)
        self.assertTrue(children["sub"].is_dir)
        self.assertFalse(children["link"].is_dir)
        self.assertTrue(stat.S_ISLNK(children["link"].mode))

    def test_read_directory_raises_for_missing_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                LocalFilesystem().read_directory(Path(tmp) / "missing")

    def test_read_link_target(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            os.symlink("target.txt", root / "link")
            filesystem = LocalFilesystem()
            link = FileEntry.from_raw(root, filesystem.read_directory(root)[0])

            self.assertEqual(read_link_target(filesystem, link), "target.txt")
            self.assertIsNone(read_link_target(filesystem, _entry("plain.txt")))

    @unittest.skipIf(fs_module.pwd is None, "user lookup requires pwd")
    def test_owner_resolves_names(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "owned.txt"
            target.write_text("", encoding="utf-8")
            user, group = LocalFilesystem().owner(target)
        self.assertTrue(user)
        self.assertTrue(group)

    def test_owner_of_missing_path_is_unknown(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(
                LocalFilesystem().owner(Path(tmp) / "missing"),
                (UNKNOWN_OWNER, UNKNOWN_OWNER),
            )


class CollectEntriesTests(unittest.TestCase):
    def test_attaches_git_status_and_owner(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "changed.py").write_text("x = 1\n", encoding="utf-8")
            (root / "clean.py").write_text("y = 1\n", encoding="utf-8")

            statuses = {root / "changed.py": "M"}
            entries = collect_entries(
                LocalFilesystem(),
                root,
                git_status_for=lambda path: statuses.get(path, ""),
                include_owner=True,
            )

        by_name = {entry.name: entry for entry in entries}
        self.assertEqual(by_name["changed.py"].git_status, "M")
        self.assertEqual(by_name["clean.py"].git_status, "")
        self.assertIsNotNone(by_name["clean.py"].owner_user)

    def test_owner_is_absent_unless_requested(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.txt").write_text("", encoding="utf-8")
            entries = collect_entries(LocalFilesystem(), root)
        self.assertIsNone(entries[0].owner_user)


if __name__ == "__main__":
    unittest.main()
