"""CLI argument handling and end-to-end listing tests.

Verifies flag parsing into ``ListingConfig`` and that ``luhut.cli.main``
lists real directories with an explicit width and color mode.
"""

from __future__ import annotations

import io
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from luhut import cli, settings
from luhut.config import LayoutMode
from luhut.sorting import SortMode


class _IsolatedSettings(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "settings" / "config.json"
        patcher = mock.patch.object(settings, "CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)


class CliParsingTests(_IsolatedSettings):
    def _config(self, *argv: str):
        return cli.config_from_args(cli.build_parser().parse_args(list(argv)))

    def test_defaults(self) -> None:
        config, path = self._config()
        self.assertEqual(path, ".")
        self.assertIs(config.sort_mode, SortMode.NAME)
        self.assertIs(config.layout, LayoutMode.FLAT)
        self.assertEqual(config.color_mode, "auto")
        self.assertEqual(config.border_style, "single")

    def test_short_h_shows_hidden_files(self) -> None:
        config, _path = self._config("-h")
        self.assertTrue(config.show_hidden)

    def test_sort_flag_priority(self) -> None:
        config, _path = self._config("-t", "-S")
        self.assertIs(config.sort_mode, SortMode.SIZE)

    def test_tree_and_recursive_flags(self) -> None:
        config, _path = self._config("-R", "-F", "-L", "4")
        self.assertIs(config.layout, LayoutMode.TREE)
        self.assertEqual(config.max_depth, 4)

    def test_patterns_accept_commas_and_repeats(self) -> None:
        config, _path = self._config("-i", "*.go,*.py", "-i", "*.md", "-x", "vendor")
        self.assertEqual(config.include_patterns, ("*.go", "*.py", "*.md"))
        self.assertEqual(config.exclude_patterns, ("vendor",))

    def test_file_operand_joins_include_patterns(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "main.go"
            target.write_text("package main\n", encoding="utf-8")
            config, path = self._config("-i", "*.py", str(target))
        self.assertEqual(path, ".")
        self.assertEqual(config.include_patterns, ("*.py", str(target)))

    def test_persisted_defaults_apply_when_flags_absent(self) -> None:
        settings.save_border_style("bold")
        settings.save_color_mode("never")
        config, _path = self._config()
        self.assertEqual(config.border_style, "bold")
        self.assertEqual(config.color_mode, "never")

        config, _path = self._config("--border", "double")
        self.assertEqual(config.border_style, "double")


class CliMainTests(_IsolatedSettings):
    def _run(self, *argv: str) -> str:
        out = io.StringIO()
        with mock.patch.object(sys, "stdout", out):
            cli.main(list(argv))
        return out.getvalue()

    def test_main_lists_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "alpha.txt").write_text("a", encoding="utf-8")
            (root / "sub").mkdir()
            (root / ".secret").write_text("", encoding="utf-8")

            text = self._run("--color", "never", "--width", "100", str(root))

        self.assertIn("alpha.txt", text)
        self.assertIn("sub", text)
        self.assertNotIn(".secret", text)
        self.assertNotIn("\033[", text)

    def test_main_tree_output(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "pkg").mkdir()
            (root / "pkg" / "mod.py").write_text("", encoding="utf-8")

            text = self._run("-F", "--color", "never", "--width", "100", str(root))

        self.assertEqual(text, f"{root}/\n└── pkg/\n    └── mod.py\n")

    def test_main_defaults_to_current_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "here.txt").write_text("", encoding="utf-8")
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                text = self._run("--color", "never", "--width", "100")
            finally:
                os.chdir(previous_cwd)
        self.assertIn("here.txt", text)

    def test_missing_path_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SystemExit) as ctx:
                self._run(str(Path(tmp) / "missing"))
        self.assertIn("path does not exist", str(ctx.exception.code))

    def test_negative_depth_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run("--max-depth=-1")
        self.assertIn("max depth cannot be negative", str(ctx.exception.code))

    def test_save_defaults_persists_choices(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self._run("--border", "double", "--color", "never", "--save-defaults", tmp)
        self.assertEqual(settings.load_border_style(), "double")
        self.assertEqual(settings.load_color_mode(), "never")


if __name__ == "__main__":
    unittest.main()
