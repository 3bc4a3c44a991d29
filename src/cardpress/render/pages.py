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

import math
from dataclasses import dataclass
from typing import Sequence

from ..cards.glossary import GLOSSARY_TITLE, glossary_blocks
from ..core.models import Card, DeckEntry, GlossaryRef
from .types import (
    FINAL_PAGE_ROWS,
    Face,
    FaceKind,
    FinalPageRows,
    Grid,
    LayoutOptions,
    Page,
    Slot,
    SlotKind,
)


@dataclass(frozen=True)
class Placement:
    kind: SlotKind
    face: Face | None = None


SPACER = Placement(kind=SlotKind.SPACER)
BLANK = Placement(kind=SlotKind.EMPTY)


def card_front(card: Card) -> Face:
    return Face(
        kind=FaceKind.FRONT,
        card_id=card.card_id,
        blocks=card.blocks,
        font_level=card.font_level,
        continued=card.continued,
        title=card.title,
        accent_color=card.accent_color,
        component_text=card.component_text,
    )


def card_back(card: Card) -> Face | None:
    if card.back is None:
        return None
    return Face(
        kind=FaceKind.BACK,
        card_id=card.card_id,
        blocks=card.back,
        font_level=card.font_level,
        title=card.title,
        accent_color=card.accent_color,
    )


def default_back(card: Card) -> Face:
    return Face(kind=FaceKind.DEFAULT_BACK, card_id=card.card_id, accent_color=card.accent_color)


def glossary_faces(ref: GlossaryRef) -> tuple[Face, Face]:
    front_blocks, back_blocks = glossary_blocks()
    return (
        Face(
            kind=FaceKind.GLOSSARY_FRONT,
            card_id=ref.card_id,
            blocks=front_blocks,
            title=GLOSSARY_TITLE,
        ),
        Face(
            kind=FaceKind.GLOSSARY_BACK,
            card_id=ref.card_id,
            blocks=back_blocks,
            title=GLOSSARY_TITLE,
        ),
    )


def entry_faces(entry: DeckEntry, options: LayoutOptions) -> tuple[Face, Face | None, bool]:
    """Return (front, back, has_real_back) for one deck entry."""
    if isinstance(entry, GlossaryRef):
        front, back = glossary_faces(entry)
        return front, back, True
    back = card_back(entry)
    if back is not None:
        return card_front(entry), back, True
    if options.default_card_back:
        return card_front(entry), default_back(entry), False
    return card_front(entry), None, False


def build_sequence(
    entries: Sequence[DeckEntry],
    grid: Grid,
    options: LayoutOptions,
) -> list[Placement]:
    """Order faces into grid slots, inserting spacers for side-by-side pairs."""
    keep_pairs = options.use_side_by_side and grid.cards_per_row > 1
    last_col = grid.cards_per_row - 1
    sequence: list[Placement] = []
    for entry in entries:
        front, back, has_real_back = entry_faces(entry, options)
        if keep_pairs and has_real_back and len(sequence) % grid.cards_per_row == last_col:
            sequence.append(SPACER)
        sequence.append(Placement(kind=SlotKind.FACE, face=front))
        if back is not None:
            sequence.append(Placement(kind=SlotKind.FACE, face=back))
    return sequence


def _page_slots(chunk: Sequence[Placement | None], grid: Grid, rows: int) -> tuple[Slot, ...]:
    slots: list[Slot] = []
    for idx in range(rows * grid.cards_per_row):
        placement = chunk[idx] if idx < len(chunk) else None
        if placement is None:
            placement = BLANK
        row, col = divmod(idx, grid.cards_per_row)
        slots.append(Slot(kind=placement.kind, row=row, col=col, face=placement.face))
    return tuple(slots)


def pack_pages(
    sequence: Sequence[Placement | None],
    grid: Grid,
    *,
    final_page_rows: FinalPageRows = "full",
) -> list[Page]:
    """Fill fixed-capacity pages in sequence order.

    Missing placements and unused trailing slots become blank placeholders so
    every page keeps the grid geometry.
    """
    if final_page_rows not in FINAL_PAGE_ROWS:
        raise ValueError(f"final_page_rows must be one of: {', '.join(FINAL_PAGE_ROWS)}")
    capacity = grid.max_faces_per_page
    total_pages = math.ceil(len(sequence) / capacity) if sequence else 0
    pages: list[Page] = []
    for page_idx in range(total_pages):
        chunk = sequence[page_idx * capacity : (page_idx + 1) * capacity]
        rows = grid.rows_per_page
        if final_page_rows == "occupied" and page_idx == total_pages - 1:
            rows = math.ceil(len(chunk) / grid.cards_per_row)
        pages.append(Page(index=page_idx, grid=grid, slots=_page_slots(chunk, grid, rows)))
    return pages
