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

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATES_ROOT = Path(__file__).parent.parent / "templates"
_PACKAGED_SHARED_DIR = TEMPLATES_ROOT / "_shared"
DEFAULT_DOCUMENT_TEMPLATE = TEMPLATES_ROOT / "cards" / "document.html.j2"
DEFAULT_FACE_TEMPLATE = TEMPLATES_ROOT / "cards" / "face_probe.html.j2"


def _build_search_paths(template_dir: Path) -> tuple[Path, ...]:
    paths: list[Path] = [template_dir.resolve()]
    for shared_dir in (template_dir.parent / "_shared", _PACKAGED_SHARED_DIR):
        if not shared_dir.is_dir():
            continue
        resolved = shared_dir.resolve()
        if resolved not in paths:
            paths.append(resolved)
    return tuple(paths)


def _read_shared_asset(rel_path: str, roots: tuple[Path, ...]) -> str:
    candidate = Path(rel_path)
    if not rel_path or candidate.is_absolute():
        raise ValueError("inline_asset requires a relative path")
    for root in roots:
        resolved = (root / candidate).resolve(strict=False)
        if not resolved.is_relative_to(root):
            raise ValueError(f"inline_asset path escapes roots: {rel_path}")
        if resolved.is_file():
            return resolved.read_text(encoding="utf-8")
    raise FileNotFoundError(f"asset not found: {rel_path}")


@lru_cache(maxsize=16)
def _get_env(template_dir: Path) -> Environment:
    search_paths = _build_search_paths(template_dir)
    env = Environment(
        loader=FileSystemLoader([str(path) for path in search_paths]),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
        auto_reload=True,
    )
    env.globals["inline_asset"] = lambda rel_path: _read_shared_asset(
        str(rel_path), search_paths
    )
    return env


def render_template(path: str | Path, context: dict[str, object]) -> str:
    template_path = Path(path)
    env = _get_env(template_path.parent.resolve())
    template = env.get_template(template_path.name)
    return template.render(**context)
