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

import json
from pathlib import Path
from typing import Any

from markupsafe import escape

from ..core.models import Card, ContentBlock, DeckEntry, GlossaryRef
from ..core.validation import optional_str, require_dict, require_list

GLOSSARY_TYPE = "glossary"
CARD_TYPE = "card"


def load_deck(path: str | Path) -> list[DeckEntry]:
    """Read a JSON deck file into ordered deck entries."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    return parse_deck(data)


def parse_deck(data: object) -> list[DeckEntry]:
    if isinstance(data, dict):
        items = require_list(data.get("cards"), label="deck.cards")
    else:
        items = require_list(data, label="deck")

    explicit_ids = _explicit_ids(items)
    entries: list[DeckEntry] = []
    seen_ids: set[str] = set()
    counters = {CARD_TYPE: 0, GLOSSARY_TYPE: 0}
    for index, raw in enumerate(items):
        label = f"deck item {index}"
        item = require_dict(raw, label=label)
        entry_type = (optional_str(item.get("type"), label=f"{label} type") or CARD_TYPE).lower()
        if entry_type not in counters:
            raise ValueError(f"{label} type must be 'card' or 'glossary'")
        card_id = optional_str(item.get("id"), label=f"{label} id")
        if card_id is None:
            card_id = _next_id(entry_type, counters, explicit_ids | seen_ids)
        else:
            counters[entry_type] += 1
        if entry_type == GLOSSARY_TYPE:
            entry: DeckEntry = GlossaryRef(card_id=card_id)
        else:
            entry = _parse_card(item, label=label, card_id=card_id)
        if entry.card_id in seen_ids:
            raise ValueError(f"{label} id {entry.card_id!r} is already used")
        seen_ids.add(entry.card_id)
        entries.append(entry)
    return entries


def _explicit_ids(items: list[Any] | tuple[Any, ...]) -> set[str]:
    ids: set[str] = set()
    for item in items:
        if isinstance(item, dict) and isinstance(item.get("id"), str) and item["id"].strip():
            ids.add(item["id"].strip())
    return ids


def _next_id(entry_type: str, counters: dict[str, int], taken: set[str]) -> str:
    # Sequential per type, skipping ids the deck already spells out.
    while True:
        counters[entry_type] += 1
        candidate = f"{entry_type}-{counters[entry_type]}"
        if candidate not in taken:
            return candidate


def _parse_card(item: dict[Any, Any], *, label: str, card_id: str) -> Card:
    blocks_raw = require_list(item.get("blocks", []), label=f"{label} blocks")
    blocks = tuple(
        _parse_block(raw, label=f"{label} block {block_index}")
        for block_index, raw in enumerate(blocks_raw)
    )
    return Card(
        card_id=card_id,
        blocks=blocks,
        title=optional_str(item.get("title"), label=f"{label} title") or "",
        accent_color=optional_str(item.get("accent_color"), label=f"{label} accent_color"),
        component_text=optional_str(item.get("component_text"), label=f"{label} component_text"),
    )


def _parse_block(raw: object, *, label: str) -> ContentBlock:
    if isinstance(raw, str):
        if not raw.strip():
            raise ValueError(f"{label} must not be empty")
        return ContentBlock(html=f"<p>{escape(raw.strip())}</p>", text=raw.strip())
    block = require_dict(raw, label=label)
    html = block.get("html")
    if not isinstance(html, str) or not html.strip():
        raise ValueError(f"{label} html must be a non-empty string")
    text = block.get("text", "")
    if not isinstance(text, str):
        raise ValueError(f"{label} text must be a string")
    return ContentBlock(html=html.strip(), text=text.strip())

