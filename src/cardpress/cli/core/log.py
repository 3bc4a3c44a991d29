#!/usr/bin/env python3
from __future__ import annotations

from collections.abc import Iterable

from ..ui import console_err


def _warn(message: str, *, quiet: bool) -> None:
    if quiet:
        return
    console_err.print(f"[yellow]Warning:[/yellow] {message}")


def _warn_all(messages: Iterable[str], *, quiet: bool) -> None:
    for message in messages:
        _warn(message, quiet=quiet)
