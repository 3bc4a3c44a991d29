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

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Sequence

from fpdf import FPDF

from ..core.models import Card, ContentBlock, FaceSide
from .measure import font_step
from .text import pt_to_mm, wrapped_height
from .types import BodyExtent, Extent, Face, FaceKind


@dataclass(frozen=True)
class CardMetrics:
    width_mm: float = 63.0
    height_mm: float = 88.0
    body_width_mm: float = 55.0
    front_body_mm: float = 42.0
    back_body_mm: float = 76.0
    block_gap_mm: float = 1.0
    font_family: str = "Helvetica"


class TextMetricsMeasurer:
    """Layout-only measurer that estimates body heights from font metrics.

    Card faces are treated as fixed-size boxes taken from CardMetrics. Body
    content is word-wrapped with fpdf string widths at the font level's size.
    """

    def __init__(self, metrics: CardMetrics | None = None) -> None:
        self.metrics = metrics or CardMetrics()
        self._pdf = FPDF(orientation="landscape", unit="mm")
        self._pdf.c_margin = 0
        self._attached: Face | None = None

    @contextmanager
    def attached(self, face: Face) -> Iterator[Face]:
        if self._attached is not None:
            raise RuntimeError(
                f"scratch surface is occupied by card {self._attached.card_id!r}"
            )
        self._attached = face
        try:
            yield face
        finally:
            self._attached = None

    def measure_face(self, face: Face) -> Extent:
        with self.attached(face):
            return Extent(width_mm=self.metrics.width_mm, height_mm=self.metrics.height_mm)

    def measure_body(
        self,
        card: Card,
        side: FaceSide,
        blocks: Sequence[ContentBlock],
        font_level: int,
    ) -> BodyExtent:
        kind = FaceKind.FRONT if side == FaceSide.FRONT else FaceKind.BACK
        face = Face(kind=kind, card_id=card.card_id, blocks=tuple(blocks), font_level=font_level)
        with self.attached(face):
            content = self._blocks_height(face.blocks, font_level)
            if side == FaceSide.FRONT:
                viewport = self.metrics.front_body_mm - self._component_height(card, font_level)
            else:
                viewport = self.metrics.back_body_mm
        return BodyExtent(content_mm=content, viewport_mm=max(0.0, viewport))

    def _use_font(self, font_level: int) -> float:
        step = font_step(font_level)
        self._pdf.set_font(self.metrics.font_family, size=step.size_pt)
        return pt_to_mm(step.line_height_pt)

    def _blocks_height(self, blocks: Sequence[ContentBlock], font_level: int) -> float:
        if not blocks:
            return 0.0
        line_height = self._use_font(font_level)
        total = sum(
            wrapped_height(
                self._pdf,
                block.plain_text(),
                max_width=self.metrics.body_width_mm,
                line_height_mm=line_height,
            )
            for block in blocks
        )
        return total + self.metrics.block_gap_mm * (len(blocks) - 1)

    def _component_height(self, card: Card, font_level: int) -> float:
        if not card.component_text:
            return 0.0
        line_height = self._use_font(font_level)
        return wrapped_height(
            self._pdf,
            card.component_text,
            max_width=self.metrics.body_width_mm,
            line_height_mm=line_height,
        )
