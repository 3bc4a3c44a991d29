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

import unittest

from cardpress.core.models import GlossaryRef
from cardpress.render.geometry import LayoutConfigError
from cardpress.render.layout import layout_cards, reference_card
from cardpress.render.types import FaceKind, LayoutContext, LayoutOptions, SlotKind
from tests.test_support import FakeMeasurer, make_blocks, make_card


class TestReferenceCard(unittest.TestCase):
    """Tests for reference_card function."""

    def test_first_regular_card_wins(self) -> None:
        first = make_card("first")
        entries = [GlossaryRef("glossary"), first, make_card("second")]
        context = LayoutContext(reference_card=make_card("context"))
        self.assertIs(reference_card(entries, context), first)

    def test_context_card_when_deck_has_no_cards(self) -> None:
        context_card = make_card("context")
        context = LayoutContext(reference_card=context_card)
        chosen = reference_card([GlossaryRef("glossary")], context)
        self.assertIs(chosen, context_card)

    def test_empty_template_card_as_last_resort(self) -> None:
        chosen = reference_card([], LayoutContext())
        self.assertEqual(chosen.card_id, "template")
        self.assertEqual(chosen.blocks, ())


class TestLayoutCards(unittest.TestCase):
    """Tests for layout_cards function."""

    def setUp(self) -> None:
        self.measurer = FakeMeasurer(
            width_mm=80,
            height_mm=100,
            front_capacity_mm=25,
            back_capacity_mm=100,
        )

    def test_grid_comes_from_reference_card(self) -> None:
        result = layout_cards([make_card("a", blocks=make_blocks(1))], "letter", self.measurer)
        self.assertEqual(result.grid.cards_per_row, 3)
        self.assertEqual(result.grid.rows_per_page, 1)
        self.assertEqual(self.measurer.face_calls[0].card_id, "a")
        self.assertEqual(self.measurer.face_calls[0].kind, FaceKind.FRONT)

    def test_seven_single_face_cards_on_letter(self) -> None:
        entries = [make_card(f"c{idx}", blocks=make_blocks(2)) for idx in range(7)]
        result = layout_cards(entries, "Letter", self.measurer)
        self.assertEqual(len(result.pages), 3)
        self.assertEqual([len(page.faces) for page in result.pages], [3, 3, 1])
        last = [slot.kind for slot in result.pages[-1].slots]
        self.assertEqual(last.count(SlotKind.EMPTY), 2)
        self.assertEqual(result.face_count, 7)
        self.assertEqual(result.warnings, ())

    def test_overflowing_card_gets_back_face(self) -> None:
        entries = [make_card("long", blocks=make_blocks(5))]
        result = layout_cards(entries, "letter", self.measurer)
        kinds = [face.kind for face in result.pages[0].faces]
        self.assertEqual(kinds, [FaceKind.FRONT, FaceKind.BACK])
        self.assertTrue(result.pages[0].faces[0].continued)
        card = result.cards[0]
        self.assertEqual(card.blocks + card.back, make_blocks(5))

    def test_degraded_card_adds_warning(self) -> None:
        measurer = FakeMeasurer(front_capacity_mm=20, back_capacity_mm=20)
        result = layout_cards([make_card("tome", blocks=make_blocks(10))], "a4", measurer)
        self.assertTrue(result.cards[0].degraded)
        self.assertEqual(len(result.warnings), 1)
        self.assertIn("tome", result.warnings[0])

    def test_side_by_side_with_default_back_warns(self) -> None:
        options = LayoutOptions(side_by_side=True, default_card_back=True)
        result = layout_cards([make_card("a", blocks=make_blocks(1))], "a4", self.measurer, options)
        self.assertTrue(any("side-by-side" in warning for warning in result.warnings))
        kinds = [face.kind for face in result.pages[0].faces]
        self.assertEqual(kinds, [FaceKind.FRONT, FaceKind.DEFAULT_BACK])

    def test_single_column_side_by_side_warns(self) -> None:
        measurer = FakeMeasurer(width_mm=200, height_mm=88)
        options = LayoutOptions(side_by_side=True)
        result = layout_cards([make_card("a", blocks=make_blocks(1))], "a4", measurer, options)
        self.assertEqual(result.grid.cards_per_row, 1)
        self.assertTrue(any("two cards per row" in warning for warning in result.warnings))

    def test_glossary_only_deck_uses_context_card(self) -> None:
        context = LayoutContext(reference_card=make_card("context"))
        result = layout_cards([GlossaryRef("glossary")], "a4", self.measurer, context=context)
        self.assertEqual(self.measurer.face_calls[0].card_id, "context")
        kinds = [face.kind for face in result.pages[0].faces]
        self.assertEqual(kinds, [FaceKind.GLOSSARY_FRONT, FaceKind.GLOSSARY_BACK])
        self.assertEqual(result.cards, ())

    def test_empty_deck_has_no_pages(self) -> None:
        result = layout_cards([], "a4", self.measurer)
        self.assertEqual(result.pages, ())
        self.assertEqual(self.measurer.face_calls[0].card_id, "template")

    def test_unknown_page_size_is_fatal(self) -> None:
        with self.assertRaises(LayoutConfigError):
            layout_cards([make_card("a")], "legal", self.measurer)

    def test_cards_are_resolved_in_input_order(self) -> None:
        entries = [make_card(name, blocks=make_blocks(1)) for name in ("x", "y", "z")]
        layout_cards(entries, "a4", self.measurer)
        self.assertEqual([call[0] for call in self.measurer.body_calls], ["x", "y", "z"])

    def test_output_is_deterministic(self) -> None:
        entries = [make_card(f"c{idx}", blocks=make_blocks(idx % 5 + 1)) for idx in range(12)]
        options = LayoutOptions(side_by_side=True)
        first = layout_cards(entries, "a4", FakeMeasurer(front_capacity_mm=25), options)
        second = layout_cards(entries, "a4", FakeMeasurer(front_capacity_mm=25), options)
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
