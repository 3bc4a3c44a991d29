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

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from enum import Enum

from ..core.models import Card, ContentBlock, FaceSide
from .measure import FIRST_SHRINK_LEVEL, MAX_FONT_LEVEL, Measurer

CONTINUATION_MARKER = " →"

FitCheck = Callable[[FaceSide, tuple[ContentBlock, ...], int], bool]
BlockHeight = Callable[[ContentBlock, int], float]


class OverflowState(str, Enum):
    FITTING = "fitting"
    SHRUNK = "shrunk"
    SPLITTING = "splitting"
    ACCEPTED = "accepted"


@dataclass(frozen=True)
class Allocation:
    front: tuple[ContentBlock, ...]
    back: tuple[ContentBlock, ...] | None
    font_level: int
    degraded: bool = False
    states: tuple[tuple[OverflowState, int], ...] = ()


def split(
    blocks: Sequence[ContentBlock],
    font_level: int = 0,
    *,
    fits: FitCheck,
) -> Allocation:
    """Decide how a card's blocks are distributed between front and back.

    Blocks leave the front from the end and enter the back at the start, so
    ``front + back`` always equals the input order. A back that still does not
    fit escalates the font level; at MAX_FONT_LEVEL the overflowing back is
    accepted and the allocation is flagged as degraded.
    """
    ordered = tuple(blocks)
    level = font_level
    states: list[tuple[OverflowState, int]] = [(OverflowState.FITTING, level)]

    if fits(FaceSide.FRONT, ordered, level):
        states.append((OverflowState.ACCEPTED, level))
        return Allocation(ordered, None, level, states=tuple(states))

    if level == 0:
        states.append((OverflowState.SHRUNK, 0))
        if fits(FaceSide.FRONT, ordered, FIRST_SHRINK_LEVEL):
            states.append((OverflowState.ACCEPTED, FIRST_SHRINK_LEVEL))
            return Allocation(ordered, None, FIRST_SHRINK_LEVEL, states=tuple(states))

    # An escalated level always builds a back, even if the front alone would now fit.
    while True:
        states.append((OverflowState.SPLITTING, level))
        front = list(ordered)
        back: list[ContentBlock] = []
        while front and not fits(FaceSide.FRONT, tuple(front), level):
            back.insert(0, front.pop())

        back_blocks = tuple(back)
        if fits(FaceSide.BACK, back_blocks, level):
            states.append((OverflowState.ACCEPTED, level))
            return Allocation(tuple(front), back_blocks, level, states=tuple(states))
        if level < MAX_FONT_LEVEL:
            level += 1
            states.append((OverflowState.SHRUNK, level))
            continue
        states.append((OverflowState.ACCEPTED, level))
        return Allocation(tuple(front), back_blocks, level, degraded=True, states=tuple(states))


def capacity_fits(
    front_capacity_mm: float,
    back_capacity_mm: float,
    block_height: BlockHeight,
) -> FitCheck:
    """Build a FitCheck from fixed face capacities and additive block heights."""

    def _fits(side: FaceSide, blocks: tuple[ContentBlock, ...], font_level: int) -> bool:
        capacity = front_capacity_mm if side == FaceSide.FRONT else back_capacity_mm
        return sum(block_height(block, font_level) for block in blocks) <= capacity

    return _fits


def measurer_fits(card: Card, measurer: Measurer) -> FitCheck:
    def _fits(side: FaceSide, blocks: tuple[ContentBlock, ...], font_level: int) -> bool:
        return not measurer.measure_body(card, side, blocks, font_level).overflows

    return _fits


def resolve_overflow(card: Card, measurer: Measurer) -> Card:
    if card.resolved:
        return card
    allocation = split(card.all_blocks(), fits=measurer_fits(card, measurer))
    return replace(
        card,
        blocks=allocation.front,
        back=allocation.back,
        font_level=allocation.font_level,
        resolved=True,
        degraded=allocation.degraded,
    )
