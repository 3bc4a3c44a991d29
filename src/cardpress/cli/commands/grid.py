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

import typer

from ...core.models import empty_card
from ...render.document import grid_summary
from ...render.layout import measure_grid
from ...render.service import RenderService
from ..core.common import _apply_ui_defaults, _ctx_value, _load_config, _run_cli
from ..startup import ensure_playwright_browsers
from ..ui import build_kv_table, console, panel
from .options import MeasureChoice

_GRID_HELP = (
    "Show the card grid for the configured paper and card size.\n\n"
    "Examples:\n"
    "  cardpress grid\n"
    "  cardpress --paper letter grid --measure browser\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_GRID_HELP)(grid)


def grid(
    ctx: typer.Context,
    measure: MeasureChoice | None = typer.Option(
        None,
        "--measure",
        help="Measurement backend (defaults to the config's measure.backend).",
        rich_help_panel="Layout",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx)
        quiet = _apply_ui_defaults(config, quiet=quiet_value)
        service = RenderService(config)
        backend = measure.value if measure is not None else config.measure_backend
        if backend == "browser":
            ensure_playwright_browsers(quiet=quiet)
        with service.measurer(backend) as measurer:
            result = measure_grid(config.page_size, measurer, empty_card())
        table = build_kv_table(grid_summary(result))
        if quiet:
            console.print(table)
        else:
            console.print(panel("Grid", table))

    _run_cli(_run, debug=debug_value)
