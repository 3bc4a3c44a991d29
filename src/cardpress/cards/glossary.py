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

from dataclasses import dataclass
from html import escape
from typing import Sequence

from ..core.models import ContentBlock

GLOSSARY_TITLE = "Glossary"


@dataclass(frozen=True)
class LegendSection:
    category: str
    items: tuple[str, ...]


DEFAULT_LEGEND: tuple[LegendSection, ...] = (
    LegendSection("Casting Time", ("Action", "Bonus Action", "Reaction")),
    LegendSection(
        "Target & Range",
        (
            "Generic Target",
            "Target You Can See",
            "Line",
            "Cone",
            "Cube",
            "Cylinder",
            "Sphere",
            "Hemisphere",
            "Emanation",
            "Circle",
            "Square",
            "Wall",
        ),
    ),
    LegendSection("Duration", ("Timed", "Until Dispelled")),
    LegendSection("Tags", ("Concentration", "Ritual", "At Higher Levels")),
    LegendSection(
        "Components",
        (
            "Verbal",
            "Somatic",
            "Material",
            "Material with Cost",
            "Material Consumed",
        ),
    ),
    LegendSection(
        "Damage Types",
        (
            "Acid",
            "Bludgeoning",
            "Cold",
            "Fire",
            "Force",
            "Lightning",
            "Necrotic",
            "Piercing",
            "Poison",
            "Psychic",
            "Radiant",
            "Slashing",
            "Thunder",
        ),
    ),
)

# Number of legend sections printed on the glossary front; the rest go on the back
_FRONT_SECTIONS = 3


def legend_block(section: LegendSection) -> ContentBlock:
    items = "".join(f"<li>{escape(item)}</li>" for item in section.items)
    html = (
        '<section class="glossary-section">'
        f"<h4>{escape(section.category)}</h4>"
        f'<ul class="glossary-items">{items}</ul>'
        "</section>"
    )
    text = f"{section.category}: {', '.join(section.items)}"
    return ContentBlock(html=html, text=text)


def glossary_blocks(
    legend: Sequence[LegendSection] = DEFAULT_LEGEND,
) -> tuple[tuple[ContentBlock, ...], tuple[ContentBlock, ...]]:
    """Split the legend into (front, back) block lists of the glossary card."""
    blocks = tuple(legend_block(section) for section in legend)
    return blocks[:_FRONT_SECTIONS], blocks[_FRONT_SECTIONS:]
