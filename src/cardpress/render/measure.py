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
from typing import Protocol, Sequence

from ..core.models import Card, ContentBlock, FaceSide
from .types import BodyExtent, Extent, Face

MAX_FONT_LEVEL = 2
# Font level applied tentatively before any split is attempted
FIRST_SHRINK_LEVEL = 1


@dataclass(frozen=True)
class FontStep:
    size_pt: float
    line_height_pt: float


FONT_STEPS: dict[int, FontStep] = {
    0: FontStep(size_pt=7.0, line_height_pt=8.0),
    1: FontStep(size_pt=6.0, line_height_pt=6.0),
    2: FontStep(size_pt=5.5, line_height_pt=5.5),
}


def font_step(level: int) -> FontStep:
    if level not in FONT_STEPS:
        raise ValueError(f"font level must be between 0 and {MAX_FONT_LEVEL}")
    return FONT_STEPS[level]


def px_to_mm(value_px: float, px_per_mm: float) -> float:
    if px_per_mm <= 0:
        raise ValueError("px_per_mm must be positive")
    return float(value_px) / float(px_per_mm)


class Measurer(Protocol):
    """Measures faces on a single scratch surface.

    Implementations attach one face at a time and report sizes in millimeters.
    """

    def measure_face(self, face: Face) -> Extent: ...

    def measure_body(
        self,
        card: Card,
        side: FaceSide,
        blocks: Sequence[ContentBlock],
        font_level: int,
    ) -> BodyExtent: ...
