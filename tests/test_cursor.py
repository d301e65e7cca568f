"""
Tests for cursor stabilization.
"""

import pytest

from timertable.controller.cursor import CursorStabilizer

A, B, C, D = "A", "B", "C", "D"


class TestNeighbor:
    """The neighbour rule looks at the old display order only."""

    @pytest.mark.parametrize("selected,expected", [
        (A, B),
        (B, C),
        (C, D),
        (D, C),
    ])
    def test_next_then_previous(self, selected, expected):
        assert CursorStabilizer.neighbor([A, B, C, D], selected) == expected

    def test_only_row_has_no_target(self):
        assert CursorStabilizer.neighbor([A], A) is None

    def test_no_selection(self):
        assert CursorStabilizer.neighbor([A, B], None) is None

    def test_selection_not_displayed(self):
        assert CursorStabilizer.neighbor([A, B], C) is None


class TestResolve:
    """Tests for resolve() after the refresh."""

    def test_surviving_target_is_kept(self):
        assert CursorStabilizer.resolve([A, B, C, D], {A, C, D}, C) == C

    def test_missing_target_falls_to_closest_survivor(self):
        # C vanished too; A and E are both two rows away
        assert CursorStabilizer.resolve([A, B, C, D, "E"], {A, "E"}, C) == "E"
        assert CursorStabilizer.resolve([A, B, C, D, "E"], {A, D}, C) == D
        assert CursorStabilizer.resolve([A, B, C, D], {A, D}, C) == D

    def test_following_row_wins_ties(self):
        assert CursorStabilizer.resolve([A, B, C], {A, C}, B) == C

    def test_nothing_survived(self):
        assert CursorStabilizer.resolve([A, B], set(), B) is None

    def test_no_target(self):
        assert CursorStabilizer.resolve([A, B], {A, B}, None) is None
