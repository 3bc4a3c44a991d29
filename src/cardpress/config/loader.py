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

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, cast

from ..render.geometry import PAGE_DIMENSIONS_MM
from ..render.text_metrics import CardMetrics
from ..render.types import FINAL_PAGE_ROWS, FinalPageRows, LayoutOptions
from .installer import DEFAULT_PAPER_SIZE, resolve_config_path

MeasureBackend = Literal["text", "browser"]
MEASURE_BACKENDS: tuple[str, ...] = ("text", "browser")


@dataclass(frozen=True)
class UiDefaults:
    quiet: bool = False
    no_color: bool = False


@dataclass(frozen=True)
class AppConfig:
    paper_size: str
    card: CardMetrics = field(default_factory=CardMetrics)
    layout: LayoutOptions = field(default_factory=LayoutOptions)
    cut_marks: bool = True
    measure_backend: MeasureBackend = "text"
    ui: UiDefaults = field(default_factory=UiDefaults)
    source_path: Path | None = None

    @property
    def page_size(self) -> str:
        return self.paper_size.lower()


def load_app_config(path: str | Path | None = None, *, paper_size: str | None = None) -> AppConfig:
    config_path = resolve_config_path(path, paper_size=paper_size)
    data = _load_toml(config_path)
    return parse_app_config(data, paper_size=paper_size, source_path=config_path)


def parse_app_config(
    data: dict[str, object],
    *,
    paper_size: str | None = None,
    source_path: Path | None = None,
) -> AppConfig:
    page_cfg = _get_dict(data, "page")
    resolved_paper_size = (
        paper_size
        or _parse_optional_str(page_cfg.get("size"), field="page.size")
        or DEFAULT_PAPER_SIZE
    )
    if resolved_paper_size.strip().lower() not in PAGE_DIMENSIONS_MM:
        raise ValueError(
            f"page.size must be one of: {', '.join(sorted(PAGE_DIMENSIONS_MM))}"
        )
    layout_cfg = _get_dict(data, "layout")
    return AppConfig(
        paper_size=resolved_paper_size.strip().upper(),
        card=_parse_card_metrics(_get_dict(data, "card")),
        layout=_parse_layout_options(layout_cfg),
        cut_marks=_parse_bool(layout_cfg.get("cut_marks"), field="layout.cut_marks", default=True),
        measure_backend=_parse_measure_backend(
            _get_dict(data, "measure").get("backend"), field="measure.backend"
        ),
        ui=_parse_ui_defaults(_get_dict(data, "ui")),
        source_path=source_path,
    )


def _parse_card_metrics(cfg: dict[str, object]) -> CardMetrics:
    defaults = CardMetrics()
    width = _parse_positive_float(
        cfg.get("width_mm"), field="card.width_mm", default=defaults.width_mm
    )
    height = _parse_positive_float(
        cfg.get("height_mm"), field="card.height_mm", default=defaults.height_mm
    )
    body_width = _parse_positive_float(
        cfg.get("body_width_mm"), field="card.body_width_mm", default=defaults.body_width_mm
    )
    if body_width > width:
        raise ValueError("card.body_width_mm must not exceed card.width_mm")
    front_body = _parse_positive_float(
        cfg.get("front_body_mm"), field="card.front_body_mm", default=defaults.front_body_mm
    )
    back_body = _parse_positive_float(
        cfg.get("back_body_mm"), field="card.back_body_mm", default=defaults.back_body_mm
    )
    for name, value in (("front_body_mm", front_body), ("back_body_mm", back_body)):
        if value > height:
            raise ValueError(f"card.{name} must not exceed card.height_mm")
    block_gap = _parse_float(
        cfg.get("block_gap_mm"), field="card.block_gap_mm", default=defaults.block_gap_mm
    )
    if block_gap < 0:
        raise ValueError("card.block_gap_mm must be zero or positive")
    font_family = (
        _parse_optional_str(cfg.get("font_family"), field="card.font_family")
        or defaults.font_family
    )
    return CardMetrics(
        width_mm=width,
        height_mm=height,
        body_width_mm=body_width,
        front_body_mm=front_body,
        back_body_mm=back_body,
        block_gap_mm=block_gap,
        font_family=font_family,
    )


def _parse_layout_options(cfg: dict[str, object]) -> LayoutOptions:
    return LayoutOptions(
        default_card_back=_parse_bool(
            cfg.get("default_card_back"), field="layout.default_card_back", default=False
        ),
        side_by_side=_parse_bool(
            cfg.get("side_by_side"), field="layout.side_by_side", default=False
        ),
        final_page_rows=_parse_final_page_rows(
            cfg.get("final_page_rows"), field="layout.final_page_rows"
        ),
    )


def _parse_ui_defaults(cfg: dict[str, object]) -> UiDefaults:
    return UiDefaults(
        quiet=_parse_bool(cfg.get("quiet"), field="ui.quiet", default=False),
        no_color=_parse_bool(cfg.get("no_color"), field="ui.no_color", default=False),
    )


def _parse_final_page_rows(value: object, *, field: str) -> FinalPageRows:
    if value is None:
        return "full"
    normalized = value.strip().lower() if isinstance(value, str) else None
    if normalized not in FINAL_PAGE_ROWS:
        raise ValueError(f"{field} must be one of: {', '.join(FINAL_PAGE_ROWS)}")
    return cast(FinalPageRows, normalized)


def _parse_measure_backend(value: object, *, field: str) -> MeasureBackend:
    if value is None:
        return "text"
    normalized = value.strip().lower() if isinstance(value, str) else None
    if normalized not in MEASURE_BACKENDS:
        raise ValueError(f"{field} must be one of: {', '.join(MEASURE_BACKENDS)}")
    return cast(MeasureBackend, normalized)


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_optional_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    return normalized or None


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{field} must be a boolean")
    raise ValueError(f"{field} must be a boolean")


def _parse_float(value: object, *, field: str, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as exc:
            raise ValueError(f"{field} must be a number") from exc
    raise ValueError(f"{field} must be a number")


def _parse_positive_float(value: object, *, field: str, default: float) -> float:
    parsed = _parse_float(value, field=field, default=default)
    if parsed <= 0:
        raise ValueError(f"{field} must be a positive number")
    return parsed
