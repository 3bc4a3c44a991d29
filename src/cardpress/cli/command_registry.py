#!/usr/bin/env python3
from __future__ import annotations

import typer

from .commands import (
    grid as grid_command,
    layout as layout_command,
)


def register(app: typer.Typer) -> None:
    grid_command.register(app)
    layout_command.register(app)
