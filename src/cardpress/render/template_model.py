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

from dataclasses import dataclass


@dataclass(frozen=True)
class FaceModel:
    kind: str
    card_id: str
    title: str
    accent_color: str | None
    font_level: int
    font_size_pt: float
    line_height_pt: float
    blocks_html: tuple[str, ...]
    component_text: str | None = None


@dataclass(frozen=True)
class SlotModel:
    kind: str
    row: int
    col: int
    x_mm: float
    y_mm: float
    face: FaceModel | None = None


@dataclass(frozen=True)
class CutMarkModel:
    x_mm: float
    y_mm: float
    width_mm: float
    height_mm: float
    orientation: str


@dataclass(frozen=True)
class PageModel:
    page_num: int
    page_label: str
    container_width_mm: float
    container_height_mm: float
    wrapper_width_mm: float
    wrapper_height_mm: float
    slots: tuple[SlotModel, ...]
    cut_marks: tuple[CutMarkModel, ...] = ()


@dataclass(frozen=True)
class TemplateContext:
    page_size_css: str
    page_width_mm: float
    page_height_mm: float
    card_width_mm: float
    card_height_mm: float
    cut_mark_gutter_mm: float
    pages: tuple[PageModel, ...]

    def to_template_dict(self) -> dict[str, object]:
        return {
            "page_size_css": self.page_size_css,
            "page_width_mm": self.page_width_mm,
            "page_height_mm": self.page_height_mm,
            "card_width_mm": self.card_width_mm,
            "card_height_mm": self.card_height_mm,
            "cut_mark_gutter_mm": self.cut_mark_gutter_mm,
            "pages": [self._page_to_dict(page) for page in self.pages],
        }

    def _page_to_dict(self, page: PageModel) -> dict[str, object]:
        return {
            "page_num": page.page_num,
            "page_label": page.page_label,
            "container_width_mm": page.container_width_mm,
            "container_height_mm": page.container_height_mm,
            "wrapper_width_mm": page.wrapper_width_mm,
            "wrapper_height_mm": page.wrapper_height_mm,
            "slots": [
                {
                    "kind": slot.kind,
                    "row": slot.row,
                    "col": slot.col,
                    "x_mm": slot.x_mm,
                    "y_mm": slot.y_mm,
                    "face": None if slot.face is None else face_to_dict(slot.face),
                }
                for slot in page.slots
            ],
            "cut_marks": [
                {
                    "x_mm": mark.x_mm,
                    "y_mm": mark.y_mm,
                    "width_mm": mark.width_mm,
                    "height_mm": mark.height_mm,
                    "orientation": mark.orientation,
                }
                for mark in page.cut_marks
            ],
        }


def face_to_dict(face: FaceModel) -> dict[str, object]:
    return {
        "kind": face.kind,
        "card_id": face.card_id,
        "title": face.title,
        "accent_color": face.accent_color,
        "font_level": face.font_level,
        "font_size_pt": face.font_size_pt,
        "line_height_pt": face.line_height_pt,
        "blocks_html": list(face.blocks_html),
        "component_text": face.component_text,
    }


__all__ = [
    "CutMarkModel",
    "FaceModel",
    "PageModel",
    "SlotModel",
    "TemplateContext",
    "face_to_dict",
]
