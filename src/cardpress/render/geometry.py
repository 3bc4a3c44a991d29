#!/usr/bin/env python3
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

from __future__ import annotations

from .types import CutMark, Grid

# Landscape page dimensions (width, height) in mm
PAGE_DIMENSIONS_MM: dict[str, tuple[float, float]] = {
    "a4": (297.0, 210.0),
    "letter": (279.4, 215.9),
}

# Total page padding per dimension (10mm each side)
PAGE_PADDING_MM = 20.0
CARD_GUTTER_MM = 1.0

CUT_MARK_GAP_MM = 2.0
CUT_MARK_LENGTH_MM = 3.0
CUT_MARK_THICKNESS_MM = 0.25
CUT_MARK_GUTTER_MM = CUT_MARK_GAP_MM + CUT_MARK_LENGTH_MM

# Tolerance for deduplicating card edges that coincide
COORDINATE_EPSILON = 0.01


class LayoutConfigError(ValueError):
    """Raised when a page size and card size cannot produce a layout."""


def normalize_page_size(page_size: str) -> str:
    normalized = str(page_size).strip().lower()
    if normalized not in PAGE_DIMENSIONS_MM:
        choices = ", ".join(sorted(PAGE_DIMENSIONS_MM))
        raise LayoutConfigError(f"unknown page size {page_size!r} (expected one of: {choices})")
    return normalized


def page_dimensions_mm(page_size: str) -> tuple[float, float]:
    return PAGE_DIMENSIONS_MM[normalize_page_size(page_size)]


def calc_cells(usable: float, cell: float, gap: float) -> int:
    return int(usable // (cell + gap))


def span_mm(count: int, cell: float, gap: float) -> float:
    if count <= 0:
        return 0.0
    return count * (cell + gap) - gap


def compute_grid(page_size: str, card_width_mm: float, card_height_mm: float) -> Grid:
    """Derive the fixed card grid for a page size from one card's size."""
    if card_width_mm <= 0 or card_height_mm <= 0:
        raise LayoutConfigError("card dimensions must be positive")
    normalized = normalize_page_size(page_size)
    page_w, page_h = PAGE_DIMENSIONS_MM[normalized]

    cards_per_row = calc_cells(page_w - PAGE_PADDING_MM, card_width_mm, CARD_GUTTER_MM)
    rows_per_page = calc_cells(page_h - PAGE_PADDING_MM, card_height_mm, CARD_GUTTER_MM)
    if cards_per_row <= 0 or rows_per_page <= 0:
        raise LayoutConfigError(
            f"card of {card_width_mm:.1f}x{card_height_mm:.1f}mm does not fit "
            f"the printable area of a {normalized} page"
        )

    return Grid(
        page_size=normalized,
        page_width_mm=page_w,
        page_height_mm=page_h,
        card_width_mm=float(card_width_mm),
        card_height_mm=float(card_height_mm),
        cards_per_row=cards_per_row,
        rows_per_page=rows_per_page,
        max_faces_per_page=cards_per_row * rows_per_page,
        container_width_mm=span_mm(cards_per_row, card_width_mm, CARD_GUTTER_MM),
        container_height_mm=span_mm(rows_per_page, card_height_mm, CARD_GUTTER_MM),
    )


def slot_origin_mm(grid: Grid, row: int, col: int) -> tuple[float, float]:
    x = col * (grid.card_width_mm + CARD_GUTTER_MM)
    y = row * (grid.card_height_mm + CARD_GUTTER_MM)
    return x, y


def _edges(count: int, cell: float) -> list[float]:
    edges: list[float] = []
    for idx in range(count):
        start = idx * (cell + CARD_GUTTER_MM)
        for edge in (start, start + cell):
            if not edges or abs(edges[-1] - edge) > COORDINATE_EPSILON:
                edges.append(edge)
    return edges


def cut_marks(grid: Grid, *, rows: int | None = None) -> tuple[CutMark, ...]:
    """Cut-mark segments around the card container, in wrapper coordinates.

    The wrapper is the container plus a CUT_MARK_GUTTER_MM band on every side;
    marks sit in that band, aligned with every card edge.
    """
    row_count = grid.rows_per_page if rows is None else rows
    container_h = span_mm(row_count, grid.card_height_mm, CARD_GUTTER_MM)
    wrapper_w = grid.container_width_mm + 2 * CUT_MARK_GUTTER_MM
    wrapper_h = container_h + 2 * CUT_MARK_GUTTER_MM
    marks: list[CutMark] = []

    for x in _edges(grid.cards_per_row, grid.card_width_mm):
        x_mm = CUT_MARK_GUTTER_MM + x
        for y_mm in (0.0, wrapper_h - CUT_MARK_LENGTH_MM):
            marks.append(
                CutMark(
                    x_mm=x_mm,
                    y_mm=y_mm,
                    width_mm=CUT_MARK_THICKNESS_MM,
                    height_mm=CUT_MARK_LENGTH_MM,
                    orientation="vertical",
                )
            )
    for y in _edges(row_count, grid.card_height_mm):
        y_mm = CUT_MARK_GUTTER_MM + y
        for x_mm in (0.0, wrapper_w - CUT_MARK_LENGTH_MM):
            marks.append(
                CutMark(
                    x_mm=x_mm,
                    y_mm=y_mm,
                    width_mm=CUT_MARK_LENGTH_MM,
                    height_mm=CUT_MARK_THICKNESS_MM,
                    orientation="horizontal",
                )
            )
    return tuple(marks)
