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
from dataclasses import replace
from typing import Sequence

from playwright.sync_api import Page

from ..core.models import Card, ContentBlock, FaceSide
from .document import render_face_html
from .html_to_pdf import get_browser, load_content
from .measure import px_to_mm
from .pages import card_front
from .types import BodyExtent, Extent, Face, FaceKind

MM_PROBE_SELECTOR = "#mm-probe"
CARD_SELECTOR = "#scratch .card"
BODY_SELECTOR = "#scratch .card-body"

_MM_PROBE_JS = "(el) => el.getBoundingClientRect().width"
_FACE_BOX_JS = "(el) => [el.offsetWidth, el.offsetHeight]"
_BODY_BOX_JS = "(el) => [el.scrollHeight, el.clientHeight]"


class BrowserMeasurer:
    """Measures faces by rendering them on one reusable Chromium page.

    The page is the scratch surface: each measurement replaces its content with
    a single face and waits for fonts and images before reading box sizes.
    """

    def __init__(self, *, card_width_mm: float | None = None, card_height_mm: float | None = None):
        self.card_width_mm = card_width_mm
        self.card_height_mm = card_height_mm
        self._page: Page | None = None
        self._px_per_mm: float | None = None
        self._attached: Face | None = None

    def close(self) -> None:
        page = self._page
        self._page = None
        self._px_per_mm = None
        if page is not None:
            page.close()

    def __enter__(self) -> BrowserMeasurer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @contextmanager
    def attached(self, face: Face) -> Iterator[Page]:
        if self._attached is not None:
            raise RuntimeError(
                f"scratch surface is occupied by card {self._attached.card_id!r}"
            )
        self._attached = face
        try:
            page = self._scratch_page()
            html = render_face_html(
                face,
                card_width_mm=self.card_width_mm,
                card_height_mm=self.card_height_mm,
            )
            load_content(page, html)
            if self._px_per_mm is None:
                self._px_per_mm = float(page.eval_on_selector(MM_PROBE_SELECTOR, _MM_PROBE_JS))
            yield page
        finally:
            self._attached = None

    def measure_face(self, face: Face) -> Extent:
        with self.attached(face) as page:
            width_px, height_px = page.eval_on_selector(CARD_SELECTOR, _FACE_BOX_JS)
            return Extent(
                width_mm=self._to_mm(width_px),
                height_mm=self._to_mm(height_px),
            )

    def measure_body(
        self,
        card: Card,
        side: FaceSide,
        blocks: Sequence[ContentBlock],
        font_level: int,
    ) -> BodyExtent:
        if side == FaceSide.FRONT:
            face = card_front(replace(card, blocks=tuple(blocks), back=None, font_level=font_level))
        else:
            face = Face(
                kind=FaceKind.BACK,
                card_id=card.card_id,
                blocks=tuple(blocks),
                font_level=font_level,
                title=card.title,
                accent_color=card.accent_color,
            )
        with self.attached(face) as page:
            scroll_px, client_px = page.eval_on_selector(BODY_SELECTOR, _BODY_BOX_JS)
            return BodyExtent(
                content_mm=self._to_mm(scroll_px),
                viewport_mm=self._to_mm(client_px),
            )

    def _scratch_page(self) -> Page:
        if self._page is None:
            self._page = get_browser().new_page()
        return self._page

    def _to_mm(self, value_px: float) -> float:
        if self._px_per_mm is None:
            raise RuntimeError("scratch surface has not been calibrated")
        return px_to_mm(value_px, self._px_per_mm)
