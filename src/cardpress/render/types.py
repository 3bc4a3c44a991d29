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

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from ..core.models import Card, ContentBlock

FinalPageRows = Literal["full", "occupied"]
FINAL_PAGE_ROWS: tuple[str, ...] = ("full", "occupied")


@dataclass(frozen=True)
class Extent:
    width_mm: float
    height_mm: float


@dataclass(frozen=True)
class BodyExtent:
    content_mm: float
    viewport_mm: float

    @property
    def overflows(self) -> bool:
        return self.content_mm > self.viewport_mm


@dataclass(frozen=True)
class Grid:
    page_size: str
    page_width_mm: float
    page_height_mm: float
    card_width_mm: float
    card_height_mm: float
    cards_per_row: int
    rows_per_page: int
    max_faces_per_page: int
    container_width_mm: float
    container_height_mm: float


@dataclass(frozen=True)
class CutMark:
    x_mm: float
    y_mm: float
    width_mm: float
    height_mm: float
    orientation: Literal["vertical", "horizontal"]


class FaceKind(str, Enum):
    FRONT = "front"
    BACK = "back"
    DEFAULT_BACK = "default_back"
    GLOSSARY_FRONT = "glossary_front"
    GLOSSARY_BACK = "glossary_back"


@dataclass(frozen=True)
class Face:
    kind: FaceKind
    card_id: str
    blocks: tuple[ContentBlock, ...] = ()
    font_level: int = 0
    continued: bool = False
    title: str = ""
    accent_color: str | None = None
    component_text: str | None = None


class SlotKind(str, Enum):
    FACE = "face"
    SPACER = "spacer"
    EMPTY = "empty"


@dataclass(frozen=True)
class Slot:
    kind: SlotKind
    row: int
    col: int
    face: Face | None = None


@dataclass(frozen=True)
class Page:
    index: int
    grid: Grid
    slots: tuple[Slot, ...]

    @property
    def faces(self) -> tuple[Face, ...]:
        return tuple(slot.face for slot in self.slots if slot.face is not None)

    @property
    def rows(self) -> int:
        if not self.slots:
            return 0
        return self.slots[-1].row + 1


@dataclass(frozen=True)
class LayoutOptions:
    default_card_back: bool = False
    side_by_side: bool = False
    final_page_rows: FinalPageRows = "full"

    @property
    def use_side_by_side(self) -> bool:
        return self.side_by_side and not self.default_card_back


@dataclass(frozen=True)
class LayoutContext:
    """Explicit inputs that the engine would otherwise look up implicitly."""

    reference_card: Card | None = None


@dataclass(frozen=True)
class LayoutResult:
    grid: Grid
    pages: tuple[Page, ...]
    cards: tuple[Card, ...]
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def face_count(self) -> int:
        return sum(len(page.faces) for page in self.pages)
