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

import re
from pathlib import Path

from .geometry import (
    CARD_GUTTER_MM,
    CUT_MARK_GUTTER_MM,
    cut_marks,
    slot_origin_mm,
    span_mm,
)
from .measure import font_step
from .overflow import CONTINUATION_MARKER
from .template_model import (
    CutMarkModel,
    FaceModel,
    PageModel,
    SlotModel,
    TemplateContext,
    face_to_dict,
)
from .templating import DEFAULT_DOCUMENT_TEMPLATE, DEFAULT_FACE_TEMPLATE, render_template
from .types import Face, Grid, LayoutResult, Page

_TRAILING_CLOSE_TAG_RE = re.compile(r"(</[A-Za-z][A-Za-z0-9]*>\s*)$")

_PAGE_SIZE_CSS = {
    "a4": "A4 landscape",
    "letter": "letter landscape",
}


def with_continuation_marker(html: str, marker: str = CONTINUATION_MARKER) -> str:
    """Append the marker inside the block's closing tag, or after plain text."""
    match = _TRAILING_CLOSE_TAG_RE.search(html)
    if match is None:
        return f"{html}{marker}"
    return f"{html[: match.start()]}{marker}{match.group(1)}"


def face_model(face: Face) -> FaceModel:
    step = font_step(face.font_level)
    blocks_html = [block.html for block in face.blocks]
    if face.continued and blocks_html:
        blocks_html[-1] = with_continuation_marker(blocks_html[-1])
    return FaceModel(
        kind=face.kind.value,
        card_id=face.card_id,
        title=face.title,
        accent_color=face.accent_color,
        font_level=face.font_level,
        font_size_pt=step.size_pt,
        line_height_pt=step.line_height_pt,
        blocks_html=tuple(blocks_html),
        component_text=face.component_text,
    )


def page_model(page: Page, *, total_pages: int, include_cut_marks: bool) -> PageModel:
    grid = page.grid
    slots: list[SlotModel] = []
    for slot in page.slots:
        x_mm, y_mm = slot_origin_mm(grid, slot.row, slot.col)
        slots.append(
            SlotModel(
                kind=slot.kind.value,
                row=slot.row,
                col=slot.col,
                x_mm=x_mm,
                y_mm=y_mm,
                face=None if slot.face is None else face_model(slot.face),
            )
        )
    container_h = span_mm(page.rows, grid.card_height_mm, CARD_GUTTER_MM)
    marks: tuple[CutMarkModel, ...] = ()
    if include_cut_marks:
        marks = tuple(
            CutMarkModel(
                x_mm=mark.x_mm,
                y_mm=mark.y_mm,
                width_mm=mark.width_mm,
                height_mm=mark.height_mm,
                orientation=mark.orientation,
            )
            for mark in cut_marks(grid, rows=page.rows)
        )
    return PageModel(
        page_num=page.index + 1,
        page_label=f"Page {page.index + 1} / {total_pages}",
        container_width_mm=grid.container_width_mm,
        container_height_mm=container_h,
        wrapper_width_mm=grid.container_width_mm + 2 * CUT_MARK_GUTTER_MM,
        wrapper_height_mm=container_h + 2 * CUT_MARK_GUTTER_MM,
        slots=tuple(slots),
        cut_marks=marks,
    )


def build_template_context(
    result: LayoutResult,
    *,
    include_cut_marks: bool = True,
) -> TemplateContext:
    grid = result.grid
    total = len(result.pages)
    return TemplateContext(
        page_size_css=_PAGE_SIZE_CSS[grid.page_size],
        page_width_mm=grid.page_width_mm,
        page_height_mm=grid.page_height_mm,
        card_width_mm=grid.card_width_mm,
        card_height_mm=grid.card_height_mm,
        cut_mark_gutter_mm=CUT_MARK_GUTTER_MM,
        pages=tuple(
            page_model(page, total_pages=total, include_cut_marks=include_cut_marks)
            for page in result.pages
        ),
    )


def render_document_html(
    result: LayoutResult,
    *,
    template_path: str | Path = DEFAULT_DOCUMENT_TEMPLATE,
    include_cut_marks: bool = True,
) -> str:
    context = build_template_context(result, include_cut_marks=include_cut_marks)
    return render_template(template_path, context.to_template_dict())


def render_face_html(
    face: Face,
    *,
    card_width_mm: float | None = None,
    card_height_mm: float | None = None,
    template_path: str | Path = DEFAULT_FACE_TEMPLATE,
) -> str:
    """Render one face alone, for measuring it on a scratch page."""
    return render_template(
        template_path,
        {
            "face": face_to_dict(face_model(face)),
            "card_width_mm": card_width_mm,
            "card_height_mm": card_height_mm,
        },
    )


def grid_summary(grid: Grid) -> list[tuple[str, str]]:
    return [
        ("Page size", grid.page_size),
        ("Page", f"{grid.page_width_mm:g} x {grid.page_height_mm:g} mm"),
        ("Card", f"{grid.card_width_mm:.1f} x {grid.card_height_mm:.1f} mm"),
        ("Cards per row", str(grid.cards_per_row)),
        ("Rows per page", str(grid.rows_per_page)),
        ("Faces per page", str(grid.max_faces_per_page)),
        ("Container", f"{grid.container_width_mm:.1f} x {grid.container_height_mm:.1f} mm"),
    ]
