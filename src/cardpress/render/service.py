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

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Literal

from ..config import AppConfig
from ..core.models import DeckEntry
from .browser_measure import BrowserMeasurer
from .document import render_document_html
from .html_to_pdf import render_html_to_pdf
from .layout import layout_cards
from .measure import Measurer
from .text_metrics import TextMetricsMeasurer
from .types import LayoutContext, LayoutOptions, LayoutResult

OutputFormat = Literal["pdf", "html"]
OUTPUT_FORMATS: tuple[str, ...] = ("pdf", "html")


@dataclass(frozen=True)
class RenderService:
    config: AppConfig

    def options(self, **overrides: object) -> LayoutOptions:
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self.config.layout, **values)

    @contextmanager
    def measurer(self, backend: str | None = None) -> Iterator[Measurer]:
        backend = backend or self.config.measure_backend
        if backend == "text":
            yield TextMetricsMeasurer(self.config.card)
            return
        if backend == "browser":
            browser_measurer = BrowserMeasurer(
                card_width_mm=self.config.card.width_mm,
                card_height_mm=self.config.card.height_mm,
            )
            with browser_measurer:
                yield browser_measurer
            return
        raise ValueError(f"unknown measure backend: {backend}")

    def layout(
        self,
        entries: Sequence[DeckEntry],
        *,
        options: LayoutOptions | None = None,
        context: LayoutContext | None = None,
        backend: str | None = None,
    ) -> LayoutResult:
        with self.measurer(backend) as measurer:
            return layout_cards(
                entries,
                self.config.page_size,
                measurer,
                options or self.config.layout,
                context,
            )

    def render_html(self, result: LayoutResult) -> str:
        return render_document_html(result, include_cut_marks=self.config.cut_marks)

    def write(self, result: LayoutResult, output_path: str | Path, *, format: OutputFormat) -> Path:
        if format not in OUTPUT_FORMATS:
            raise ValueError(f"output format must be one of: {', '.join(OUTPUT_FORMATS)}")
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        html = self.render_html(result)
        if format == "html":
            output_path.write_text(html, encoding="utf-8")
            return output_path
        render_html_to_pdf(html, output_path)
        return output_path
