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

import functools
import importlib.metadata
import inspect
import os
import re
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

import playwright
from platformdirs import user_cache_dir
from playwright.sync_api import sync_playwright
from rich.progress import Progress, TaskID
from rich.traceback import install as install_rich_traceback

from ..config import init_user_config, user_config_needs_init
from .ui import configure_ui, console, progress

_PLAYWRIGHT_SKIP_ENV = "CARDPRESS_SKIP_PLAYWRIGHT_INSTALL"
_PLAYWRIGHT_BROWSERS_ENV = "PLAYWRIGHT_BROWSERS_PATH"
_PLAYWRIGHT_PERCENT_RE = re.compile(r"(\d{1,3})%")
_INSTALL_LOG_LINES = 200

ProgressCallback = Callable[[int | None, int | None, str | None], None]


def run_startup(
    *,
    quiet: bool,
    no_color: bool,
    debug: bool,
    init_config: bool,
) -> bool:
    """Prepare the console and user config; return True when the CLI should exit."""
    configure_ui(no_color=no_color)
    if debug:
        install_rich_traceback(show_locals=True)
    if init_config:
        config_dir = init_user_config()
        console.print(f"User config ready at {config_dir}")
        return True
    if user_config_needs_init():
        config_dir = init_user_config()
        if not quiet:
            console.print(f"[dim]Initialized user config at {config_dir}[/dim]")
    return False


def ensure_playwright_browsers(*, quiet: bool = True) -> None:
    """Install Chromium for Playwright unless it is already present."""
    if os.environ.get(_PLAYWRIGHT_SKIP_ENV):
        return
    if _playwright_precheck():
        return
    with progress(quiet=quiet) as progress_bar:
        task_id = None
        if progress_bar is not None:
            task_id = progress_bar.add_task("Installing Chromium for Playwright...", total=None)
        progress_cb = (
            functools.partial(_progress_update, progress_bar, task_id) if progress_bar else None
        )
        _playwright_install(progress_cb)
        if progress_bar is not None and task_id is not None:
            _progress_finalize(progress_bar, task_id)


def _configure_playwright_env() -> None:
    if os.environ.get(_PLAYWRIGHT_BROWSERS_ENV):
        return
    os.environ[_PLAYWRIGHT_BROWSERS_ENV] = user_cache_dir("ms-playwright", appauthor=False)


def _playwright_precheck() -> bool:
    _configure_playwright_env()
    try:
        with sync_playwright() as playwright_instance:
            executable = Path(playwright_instance.chromium.executable_path)
    except (OSError, RuntimeError, playwright.sync_api.Error):
        return False
    return executable.exists()


def _playwright_driver_command() -> tuple[str, str]:
    driver_path = Path(inspect.getfile(playwright)).parent / "driver"
    cli_path = str(driver_path / "package" / "cli.js")
    node_name = "node.exe" if sys.platform == "win32" else "node"
    node_path = os.getenv("PLAYWRIGHT_NODEJS_PATH", str(driver_path / node_name))
    return node_path, cli_path


def _playwright_driver_env() -> dict[str, str]:
    env = os.environ.copy()
    env["PW_LANG_NAME"] = "python"
    env["PW_LANG_NAME_VERSION"] = f"{sys.version_info.major}.{sys.version_info.minor}"
    env["PW_CLI_DISPLAY_VERSION"] = importlib.metadata.version("playwright")
    return env


def _progress_update(
    progress_bar: Progress,
    task_id: TaskID | None,
    completed: int | None,
    total: int | None,
    description: str | None,
) -> None:
    if task_id is None:
        return
    if total is not None:
        progress_bar.update(task_id, total=total)
    if description:
        progress_bar.update(task_id, description=description)
    if completed is not None:
        progress_bar.update(task_id, completed=completed)


def _progress_finalize(progress_bar: Progress, task_id: TaskID) -> None:
    total = progress_bar.tasks[task_id].total
    progress_bar.update(task_id, completed=total if total is not None else 1)


def _playwright_install(progress_cb: ProgressCallback | None) -> None:
    driver_executable, driver_cli = _playwright_driver_command()
    cmd = [driver_executable, driver_cli, "install", "chromium"]
    env = _playwright_driver_env()
    if progress_cb is None:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            env=env,
            check=False,
        )
        if result.returncode != 0:
            detail = result.stderr.strip() or result.stdout.strip() or "unknown error"
            raise RuntimeError(f"Playwright install failed: {detail}")
        return

    output_lines: list[str] = []
    current = 0
    progress_cb(0, 100, None)
    process = subprocess.Popen(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        env=env,
        bufsize=1,
    )
    if process.stdout is None:
        raise RuntimeError("Playwright install failed: unable to capture output")
    for line in process.stdout:
        output_lines.append(line)
        if len(output_lines) > _INSTALL_LOG_LINES:
            output_lines.pop(0)
        percent = _parse_playwright_progress(line)
        current = max(current, percent) if percent is not None else min(99, current + 1)
        progress_cb(current, 100, None)
    if process.wait() != 0:
        detail = "".join(output_lines).strip() or "unknown error"
        raise RuntimeError(f"Playwright install failed: {detail}")


def _parse_playwright_progress(line: str) -> int | None:
    match = _PLAYWRIGHT_PERCENT_RE.search(line.strip())
    if match is None:
        return None
    return min(100, int(match.group(1)))
