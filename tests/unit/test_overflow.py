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

from cardpress.core.models import FaceSide
from cardpress.render.measure import MAX_FONT_LEVEL
from cardpress.render.overflow import (
    OverflowState,
    capacity_fits,
    resolve_overflow,
    split,
)
from tests.test_support import FakeMeasurer, block_height, make_block, make_blocks, make_card


def _fits(front: float, back: float):
    return capacity_fits(front, back, block_height)


class TestSplit(unittest.TestCase):
    """Tests for split function."""

    def test_everything_fits_on_front(self) -> None:
        blocks = make_blocks(3)
        allocation = split(blocks, fits=_fits(40, 80))
        self.assertEqual(allocation.front, blocks)
        self.assertIsNone(allocation.back)
        self.assertEqual(allocation.font_level, 0)
        self.assertFalse(allocation.degraded)
        self.assertEqual(
            allocation.states,
            ((OverflowState.FITTING, 0), (OverflowState.ACCEPTED, 0)),
        )

    def test_exact_fill_keeps_single_face(self) -> None:
        """Content equal to the front capacity is not an overflow."""
        blocks = make_blocks(4)
        allocation = split(blocks, fits=_fits(40, 80))
        self.assertEqual(allocation.front, blocks)
        self.assertIsNone(allocation.back)
        self.assertEqual(allocation.font_level, 0)

    def test_tentative_shrink_avoids_back(self) -> None:
        blocks = make_blocks(3)
        allocation = split(blocks, fits=_fits(25, 80))
        self.assertEqual(allocation.front, blocks)
        self.assertIsNone(allocation.back)
        self.assertEqual(allocation.font_level, 1)
        self.assertIn((OverflowState.SHRUNK, 0), allocation.states)

    def test_split_moves_trailing_blocks_to_back(self) -> None:
        blocks = make_blocks(5)
        allocation = split(blocks, fits=_fits(25, 100))
        self.assertEqual(allocation.front, blocks[:2])
        self.assertEqual(allocation.back, blocks[2:])
        self.assertEqual(allocation.font_level, 0)
        self.assertFalse(allocation.degraded)

    def test_back_overflow_escalates_font_level(self) -> None:
        blocks = make_blocks(6)
        allocation = split(blocks, fits=_fits(20, 20))
        self.assertEqual(allocation.font_level, 2)
        self.assertEqual(allocation.front, blocks[:3])
        self.assertEqual(allocation.back, blocks[3:])
        self.assertFalse(allocation.degraded)
        self.assertEqual(
            allocation.states,
            (
                (OverflowState.FITTING, 0),
                (OverflowState.SHRUNK, 0),
                (OverflowState.SPLITTING, 0),
                (OverflowState.SHRUNK, 1),
                (OverflowState.SPLITTING, 1),
                (OverflowState.SHRUNK, 2),
                (OverflowState.SPLITTING, 2),
                (OverflowState.ACCEPTED, 2),
            ),
        )

    def test_escalated_level_keeps_back_when_front_fits(self) -> None:
        """A front that only fits after escalating still gets a (possibly empty) back."""
        blocks = make_blocks(3)
        allocation = split(blocks, fits=_fits(20, 5))
        self.assertEqual(allocation.font_level, 2)
        self.assertEqual(allocation.front, blocks)
        self.assertEqual(allocation.back, ())
        self.assertFalse(allocation.degraded)
        self.assertEqual(
            allocation.states,
            (
                (OverflowState.FITTING, 0),
                (OverflowState.SHRUNK, 0),
                (OverflowState.SPLITTING, 0),
                (OverflowState.SHRUNK, 1),
                (OverflowState.SPLITTING, 1),
                (OverflowState.SHRUNK, 2),
                (OverflowState.SPLITTING, 2),
                (OverflowState.ACCEPTED, 2),
            ),
        )

    def test_overflow_at_cap_is_accepted_as_degraded(self) -> None:
        blocks = make_blocks(10)
        allocation = split(blocks, fits=_fits(20, 20))
        self.assertEqual(allocation.font_level, MAX_FONT_LEVEL)
        self.assertTrue(allocation.degraded)
        self.assertEqual(allocation.front, blocks[:3])
        self.assertEqual(allocation.back, blocks[3:])
        self.assertEqual(allocation.states[-1], (OverflowState.ACCEPTED, MAX_FONT_LEVEL))

    def test_single_oversized_block_lands_on_back(self) -> None:
        blocks = (make_block("huge", 500),)
        allocation = split(blocks, fits=_fits(20, 20))
        self.assertEqual(allocation.front, ())
        self.assertEqual(allocation.back, blocks)
        self.assertTrue(allocation.degraded)

    def test_blocks_are_conserved_in_order(self) -> None:
        cases = (
            (make_blocks(1, 15), 10, 10),
            (make_blocks(7, 3), 10, 10),
            (make_blocks(12, 9), 30, 50),
            (tuple(make_block(f"m{idx}", 2 + idx) for idx in range(9)), 25, 40),
        )
        for blocks, front, back in cases:
            with self.subTest(count=len(blocks), front=front, back=back):
                allocation = split(blocks, fits=_fits(front, back))
                self.assertEqual(allocation.front + (allocation.back or ()), blocks)
                self.assertLessEqual(allocation.font_level, MAX_FONT_LEVEL)

    def test_empty_card_fits(self) -> None:
        allocation = split((), fits=_fits(0, 0))
        self.assertEqual(allocation.front, ())
        self.assertIsNone(allocation.back)
        self.assertEqual(allocation.font_level, 0)

    def test_starting_level_is_respected(self) -> None:
        blocks = make_blocks(3)
        allocation = split(blocks, 2, fits=_fits(18, 80))
        self.assertEqual(allocation.font_level, 2)
        self.assertIsNone(allocation.back)


class TestCapacityFits(unittest.TestCase):
    """Tests for capacity_fits function."""

    def test_uses_side_capacity(self) -> None:
        fits = _fits(10, 30)
        blocks = make_blocks(2)
        self.assertFalse(fits(FaceSide.FRONT, blocks, 0))
        self.assertTrue(fits(FaceSide.BACK, blocks, 0))

    def test_font_level_changes_heights(self) -> None:
        fits = _fits(16, 16)
        blocks = make_blocks(2)
        self.assertFalse(fits(FaceSide.FRONT, blocks, 0))
        self.assertTrue(fits(FaceSide.FRONT, blocks, 1))


class TestResolveOverflow(unittest.TestCase):
    """Tests for resolve_overflow function."""

    def test_resolves_split_card(self) -> None:
        measurer = FakeMeasurer(front_capacity_mm=25, back_capacity_mm=100)
        card = make_card("fireball", blocks=make_blocks(5))
        resolved = resolve_overflow(card, measurer)
        self.assertTrue(resolved.resolved)
        self.assertEqual(len(resolved.blocks), 2)
        self.assertEqual(len(resolved.back or ()), 3)
        self.assertTrue(resolved.continued)
        self.assertFalse(resolved.degraded)

    def test_is_idempotent(self) -> None:
        measurer = FakeMeasurer(front_capacity_mm=20, back_capacity_mm=20)
        card = make_card("wish", blocks=make_blocks(8))
        first = resolve_overflow(card, measurer)
        calls = len(measurer.body_calls)
        second = resolve_overflow(first, measurer)
        self.assertEqual(second, first)
        self.assertEqual(len(measurer.body_calls), calls)

    def test_flags_degraded_card(self) -> None:
        measurer = FakeMeasurer(front_capacity_mm=20, back_capacity_mm=20)
        resolved = resolve_overflow(make_card("tome", blocks=make_blocks(10)), measurer)
        self.assertTrue(resolved.degraded)
        self.assertEqual(resolved.font_level, MAX_FONT_LEVEL)

    def test_measures_against_the_card(self) -> None:
        measurer = FakeMeasurer(front_capacity_mm=40)
        resolve_overflow(make_card("light", blocks=make_blocks(2)), measurer)
        self.assertEqual(measurer.body_calls, [("light", FaceSide.FRONT, 2, 0)])


if __name__ == "__main__":
    unittest.main()
