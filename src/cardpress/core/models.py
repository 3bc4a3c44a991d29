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

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")


class FaceSide(str, Enum):
    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True)
class ContentBlock:
    """One rendered unit of card body content (paragraph, list, table, ...)."""

    html: str
    text: str = ""

    def plain_text(self) -> str:
        if self.text:
            return self.text
        return _SPACE_RE.sub(" ", _TAG_RE.sub(" ", self.html)).strip()


@dataclass(frozen=True)
class Card:
    card_id: str
    blocks: tuple[ContentBlock, ...]
    back: tuple[ContentBlock, ...] | None = None
    font_level: int = 0
    title: str = ""
    accent_color: str | None = None
    component_text: str | None = None
    resolved: bool = False
    degraded: bool = False

    @property
    def has_back(self) -> bool:
        return self.back is not None

    @property
    def continued(self) -> bool:
        return self.back is not None and bool(self.blocks)

    def all_blocks(self) -> tuple[ContentBlock, ...]:
        return self.blocks + (self.back or ())


@dataclass(frozen=True)
class GlossaryRef:
    card_id: str
    type: str = field(default="glossary", init=False)


DeckEntry = Union[Card, GlossaryRef]


def empty_card(card_id: str = "template") -> Card:
    return Card(card_id=card_id, blocks=(), title="")
