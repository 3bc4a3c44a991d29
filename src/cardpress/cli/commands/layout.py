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

from pathlib import Path

import typer

from ...cards.deck import load_deck
from ...render.document import grid_summary
from ...render.service import RenderService
from ...render.types import LayoutResult, SlotKind
from ..core.common import _apply_ui_defaults, _ctx_value, _load_config, _run_cli
from ..core.log import _warn_all
from ..startup import ensure_playwright_browsers
from ..ui import build_kv_table, build_pages_table, console, panel
from .options import FinalPageRowsChoice, FormatChoice, MeasureChoice

_LAYOUT_HELP = (
    "Lay out a JSON deck of cards onto printable pages (PDF/HTML).\n\n"
    "Examples:\n"
    "  cardpress layout spells.json -o spells.pdf\n"
    "  cardpress layout spells.json --format html --side-by-side\n"
    "  cardpress --paper letter layout spells.json --default-back\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_LAYOUT_HELP)(layout)


def layout(
    ctx: typer.Context,
    deck: Path = typer.Argument(
        ...,
        help="Deck JSON file.",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (defaults to <deck>.<format>).",
        rich_help_panel="Outputs",
    ),
    format: FormatChoice = typer.Option(
        FormatChoice.PDF,
        "--format",
        "-f",
        help="Output format.",
        rich_help_panel="Outputs",
    ),
    side_by_side: bool | None = typer.Option(
        None,
        "--side-by-side/--no-side-by-side",
        help="Keep each front and its back on the same row.",
        rich_help_panel="Layout",
    ),
    default_back: bool | None = typer.Option(
        None,
        "--default-back/--no-default-back",
        help="Give cards without a back a decorative default back.",
        rich_help_panel="Layout",
    ),
    final_page_rows: FinalPageRowsChoice | None = typer.Option(
        None,
        "--final-page-rows",
        help="Pad the last page to full rows or keep only occupied rows.",
        rich_help_panel="Layout",
    ),
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
        if backend == "browser" or format == FormatChoice.PDF:
            ensure_playwright_browsers(quiet=quiet)

        entries = load_deck(deck)
        options = service.options(
            side_by_side=side_by_side,
            default_card_back=default_back,
            final_page_rows=None if final_page_rows is None else final_page_rows.value,
        )
        result = service.layout(entries, options=options, backend=backend)
        output_path = output or deck.with_suffix(f".{format.value}")
        service.write(result, output_path, format=format.value)

        _warn_all(result.warnings, quiet=quiet)
        if quiet:
            return
        console.print(panel("Layout", build_kv_table(_summary_rows(result, output_path))))
        console.print(build_pages_table(_page_rows(result)))

    _run_cli(_run, debug=debug_value)


def _summary_rows(result: LayoutResult, output_path: Path) -> list[tuple[str, str]]:
    degraded = sum(1 for card in result.cards if card.degraded)
    rows = [
        ("Cards", str(len(result.cards))),
        ("Faces", str(result.face_count)),
        ("Pages", str(len(result.pages))),
    ]
    if degraded:
        rows.append(("Degraded", str(degraded)))
    rows.extend(grid_summary(result.grid))
    rows.append(("Output", str(output_path)))
    return rows


def _page_rows(result: LayoutResult) -> list[tuple[int, int, int, int]]:
    rows = []
    for page in result.pages:
        kinds = [slot.kind for slot in page.slots]
        rows.append(
            (
                page.index + 1,
                kinds.count(SlotKind.FACE),
                kinds.count(SlotKind.SPACER),
                kinds.count(SlotKind.EMPTY),
            )
        )
    return rows
