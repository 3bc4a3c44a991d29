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

from typing import Sequence

from ..core.models import Card, DeckEntry, empty_card
from .geometry import compute_grid, normalize_page_size
from .measure import MAX_FONT_LEVEL, Measurer
from .overflow import resolve_overflow
from .pages import build_sequence, card_front, pack_pages
from .types import Grid, LayoutContext, LayoutOptions, LayoutResult

__all__ = ["layout_cards", "measure_grid", "reference_card", "resolve_entries"]


def reference_card(entries: Sequence[DeckEntry], context: LayoutContext) -> Card:
    """Pick the card whose measured size defines the grid."""
    for entry in entries:
        if isinstance(entry, Card):
            return entry
    if context.reference_card is not None:
        return context.reference_card
    return empty_card()


def measure_grid(page_size: str, measurer: Measurer, card: Card) -> Grid:
    extent = measurer.measure_face(card_front(card))
    return compute_grid(page_size, extent.width_mm, extent.height_mm)


def resolve_entries(
    entries: Sequence[DeckEntry],
    measurer: Measurer,
) -> tuple[list[DeckEntry], list[str]]:
    """Resolve overflow for every card, one card at a time, in input order."""
    resolved: list[DeckEntry] = []
    warnings: list[str] = []
    for entry in entries:
        if not isinstance(entry, Card):
            resolved.append(entry)
            continue
        card = resolve_overflow(entry, measurer)
        if card.degraded:
            warnings.append(
                f"card {card.card_id!r} still overflows at font level {MAX_FONT_LEVEL}; "
                "its back face is truncated"
            )
        resolved.append(card)
    return resolved, warnings


def layout_cards(
    entries: Sequence[DeckEntry],
    page_size: str,
    measurer: Measurer,
    options: LayoutOptions | None = None,
    context: LayoutContext | None = None,
) -> LayoutResult:
    """Lay out a deck onto printable pages."""
    options = options or LayoutOptions()
    context = context or LayoutContext()
    page_size = normalize_page_size(page_size)

    grid = measure_grid(page_size, measurer, reference_card(entries, context))
    resolved, warnings = resolve_entries(entries, measurer)

    if options.side_by_side and options.default_card_back:
        warnings.append("side-by-side is ignored when every card gets a default back")
    elif options.side_by_side and grid.cards_per_row < 2:
        warnings.append(
            "side-by-side needs at least two cards per row; fronts and backs are packed in order"
        )

    sequence = build_sequence(resolved, grid, options)
    pages = pack_pages(sequence, grid, final_page_rows=options.final_page_rows)
    return LayoutResult(
        grid=grid,
        pages=tuple(pages),
        cards=tuple(entry for entry in resolved if isinstance(entry, Card)),
        warnings=tuple(warnings),
    )
