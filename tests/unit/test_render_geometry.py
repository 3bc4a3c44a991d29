# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

import unittest

from cardpress.render.geometry import (
    CARD_GUTTER_MM,
    CUT_MARK_GUTTER_MM,
    CUT_MARK_LENGTH_MM,
    PAGE_PADDING_MM,
    LayoutConfigError,
    calc_cells,
    compute_grid,
    cut_marks,
    normalize_page_size,
    page_dimensions_mm,
    slot_origin_mm,
    span_mm,
)


class TestCalcCells(unittest.TestCase):
    """Tests for calc_cells function."""

    def test_floor_of_cell_plus_gap(self) -> None:
        # 277 // 64 = 4
        self.assertEqual(calc_cells(usable=277, cell=63, gap=1), 4)

    def test_cell_larger_than_space(self) -> None:
        self.assertEqual(calc_cells(usable=10, cell=20, gap=1), 0)


class TestSpanMm(unittest.TestCase):
    """Tests for span_mm function."""

    def test_gaps_between_cells_only(self) -> None:
        self.assertAlmostEqual(span_mm(4, 63, 1), 255.0)

    def test_zero_count(self) -> None:
        self.assertEqual(span_mm(0, 63, 1), 0.0)


class TestNormalizePageSize(unittest.TestCase):
    """Tests for normalize_page_size function."""

    def test_case_insensitive(self) -> None:
        self.assertEqual(normalize_page_size(" A4 "), "a4")
        self.assertEqual(normalize_page_size("Letter"), "letter")

    def test_unknown_size_is_fatal(self) -> None:
        with self.assertRaises(LayoutConfigError) as ctx:
            normalize_page_size("legal")
        self.assertIn("legal", str(ctx.exception))

    def test_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(LayoutConfigError, ValueError))

    def test_landscape_dimensions(self) -> None:
        self.assertEqual(page_dimensions_mm("a4"), (297.0, 210.0))
        self.assertEqual(page_dimensions_mm("letter"), (279.4, 215.9))


class TestComputeGrid(unittest.TestCase):
    """Tests for compute_grid function."""

    def test_standard_card_on_a4(self) -> None:
        grid = compute_grid("a4", 63, 88)
        self.assertEqual(grid.cards_per_row, 4)
        self.assertEqual(grid.rows_per_page, 2)
        self.assertEqual(grid.max_faces_per_page, 8)
        self.assertAlmostEqual(grid.container_width_mm, 255.0)
        self.assertAlmostEqual(grid.container_height_mm, 177.0)

    def test_large_card_on_letter(self) -> None:
        grid = compute_grid("letter", 80, 100)
        self.assertEqual(grid.cards_per_row, 3)
        self.assertEqual(grid.rows_per_page, 1)
        self.assertEqual(grid.max_faces_per_page, 3)

    def test_container_within_printable_area(self) -> None:
        for page_size in ("a4", "letter"):
            for width, height in ((63, 88), (80, 100), (50, 50), (120, 90), (25.4, 25.4)):
                with self.subTest(page_size=page_size, width=width, height=height):
                    grid = compute_grid(page_size, width, height)
                    self.assertGreaterEqual(grid.cards_per_row, 1)
                    self.assertGreaterEqual(grid.rows_per_page, 1)
                    self.assertLessEqual(
                        grid.container_width_mm, grid.page_width_mm - PAGE_PADDING_MM
                    )
                    self.assertLessEqual(
                        grid.container_height_mm, grid.page_height_mm - PAGE_PADDING_MM
                    )

    def test_card_too_large_is_fatal(self) -> None:
        with self.assertRaises(LayoutConfigError):
            compute_grid("a4", 300, 88)
        with self.assertRaises(LayoutConfigError):
            compute_grid("letter", 63, 200)

    def test_non_positive_dimensions_are_fatal(self) -> None:
        for width, height in ((0, 88), (63, 0), (-1, 88)):
            with self.subTest(width=width, height=height):
                with self.assertRaises(LayoutConfigError):
                    compute_grid("a4", width, height)

    def test_unknown_page_size_is_fatal(self) -> None:
        with self.assertRaises(LayoutConfigError):
            compute_grid("tabloid", 63, 88)


class TestSlotOrigin(unittest.TestCase):
    """Tests for slot_origin_mm function."""

    def test_offsets_include_gutter(self) -> None:
        grid = compute_grid("a4", 63, 88)
        self.assertEqual(slot_origin_mm(grid, 0, 0), (0.0, 0.0))
        expected = (2 * (63 + CARD_GUTTER_MM), 88 + CARD_GUTTER_MM)
        self.assertEqual(slot_origin_mm(grid, 1, 2), expected)


class TestCutMarks(unittest.TestCase):
    """Tests for cut_marks function."""

    def test_one_mark_pair_per_card_edge(self) -> None:
        grid = compute_grid("a4", 63, 88)
        marks = cut_marks(grid)
        vertical = [mark for mark in marks if mark.orientation == "vertical"]
        horizontal = [mark for mark in marks if mark.orientation == "horizontal"]
        # 4 columns -> 8 distinct x edges, 2 rows -> 4 distinct y edges
        self.assertEqual(len(vertical), 16)
        self.assertEqual(len(horizontal), 8)

    def test_marks_stay_in_gutter_band(self) -> None:
        grid = compute_grid("a4", 63, 88)
        wrapper_w = grid.container_width_mm + 2 * CUT_MARK_GUTTER_MM
        wrapper_h = grid.container_height_mm + 2 * CUT_MARK_GUTTER_MM
        for mark in cut_marks(grid):
            if mark.orientation == "vertical":
                self.assertIn(mark.y_mm, (0.0, wrapper_h - CUT_MARK_LENGTH_MM))
                self.assertGreaterEqual(mark.x_mm, CUT_MARK_GUTTER_MM)
            else:
                self.assertIn(mark.x_mm, (0.0, wrapper_w - CUT_MARK_LENGTH_MM))
                self.assertGreaterEqual(mark.y_mm, CUT_MARK_GUTTER_MM)

    def test_rows_override_limits_horizontal_marks(self) -> None:
        grid = compute_grid("a4", 63, 88)
        marks = cut_marks(grid, rows=1)
        horizontal = [mark for mark in marks if mark.orientation == "horizontal"]
        self.assertEqual(len(horizontal), 4)

    def test_each_vertical_edge_is_marked_top_and_bottom(self) -> None:
        grid = compute_grid("a4", 63, 88)
        xs = [mark.x_mm for mark in cut_marks(grid) if mark.orientation == "vertical"]
        self.assertEqual(len(xs), 2 * len(set(xs)))


if __name__ == "__main__":
    unittest.main()
