"""Tests for column sizing: natural widths, clamping, and proportional shrink."""

from __future__ import annotations

import unittest

from luhut.colors import Palette
from luhut.errors import LayoutTooSmallError
from luhut.render.layout import (
    border_overhead,
    clamp_widths,
    compute_column_widths,
    lookup_min,
    natural_widths,
    shrink_widths,
)

MINS = [15, 6, 10, 10]
MAXS = [50, 10, 15, 12]
HEADER = ["Name", "Size", "Modified", "Perms"]


class NaturalWidthTests(unittest.TestCase):
    def test_widest_cell_per_column_including_header(self) -> None:
        rows = [
            ["Name", "Size", "Modified"],
            ["file.txt", "1.2 KB", "2 minutes ago"],
            ["very-long-filename.go", "15.3 KB", "1 hour ago"],
        ]
        self.assertEqual(natural_widths(rows), [21, 7, 13])

    def test_color_codes_do_not_count(self) -> None:
        painted = Palette().paint("main.go", "green")
        self.assertEqual(natural_widths([["Name"], [painted]]), [7])

    def test_no_rows(self) -> None:
        self.assertEqual(natural_widths([]), [])


class ConstraintTests(unittest.TestCase):
    def test_lookup_min_falls_back_for_unconfigured_columns(self) -> None:
        self.assertEqual(lookup_min(MINS, 0), 15)
        self.assertEqual(lookup_min(MINS, 7), 4)
        self.assertEqual(lookup_min([0], 0), 4)

    def test_border_overhead(self) -> None:
        self.assertEqual(border_overhead(4), 11)
        self.assertEqual(border_overhead(1), 2)
        self.assertEqual(border_overhead(0), 0)

    def test_clamp_widths(self) -> None:
        self.assertEqual(clamp_widths([3, 20, 12, 10, 1], MINS, MAXS), [15, 10, 12, 10, 4])


class ComputeColumnWidthsTests(unittest.TestCase):
    def test_fitting_table_uses_clamped_natural_widths(self) -> None:
        rows = [HEADER, ["a.txt", "10 B", "5 minutes ago", "-rw-r--r--"]]
        self.assertEqual(compute_column_widths(rows, MINS, MAXS, 120), [15, 6, 13, 10])

    def test_overflow_shrinks_proportionally_to_slack(self) -> None:
        rows = [HEADER, ["x" * 50, "1.0 KB", "5 minutes ago", "-rw-r--r--"]]
        self.assertEqual(compute_column_widths(rows, MINS, MAXS, 70), [32, 6, 12, 10])

    def test_exempt_columns_are_not_shrunk(self) -> None:
        widths = shrink_widths([20, 10, 12, 12], MINS, 8, exempt={1, 3})
        self.assertEqual(widths[1], 10)
        self.assertEqual(widths[3], 12)

    def test_shrink_never_goes_below_minimums(self) -> None:
        widths = shrink_widths([16, 6, 11, 10], MINS, 100, exempt={1, 3})
        self.assertEqual(widths, [15, 6, 10, 10])

    def test_infeasible_layout_raises(self) -> None:
        rows = [HEADER, ["a", "1 B", "now", "-"]]
        with self.assertRaises(LayoutTooSmallError) as ctx:
            compute_column_widths(rows, MINS, MAXS, 51)
        self.assertEqual(ctx.exception.required, 52)
        self.assertEqual(compute_column_widths(rows, MINS, MAXS, 52), [15, 6, 10, 10])

    def test_widths_respect_minimums(self) -> None:
        rows = [HEADER, ["n" * 80, "999.9 MB", "11 months ago", "-rwxr-xr-x"]]
        for available in (54, 60, 75, 90, 140):
            widths = compute_column_widths(rows, MINS, MAXS, available)
            for idx, width in enumerate(widths):
                self.assertGreaterEqual(width, MINS[idx])
                self.assertLessEqual(width, MAXS[idx])

    def test_exempt_columns_count_at_their_width_when_checking_fit(self) -> None:
        rows = [HEADER, ["a", "1023.9 KB", "now", "-rw-r--r--"]]
        with self.assertRaises(LayoutTooSmallError) as ctx:
            compute_column_widths(rows, MINS, MAXS, 52)
        self.assertEqual(ctx.exception.required, 55)

        widths = compute_column_widths(rows, MINS, MAXS, 55)
        self.assertEqual(widths, [15, 9, 10, 10])
        self.assertLessEqual(sum(widths) + border_overhead(len(widths)), 55)


if __name__ == "__main__":
    unittest.main()
