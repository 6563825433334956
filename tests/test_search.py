"""Tests for the search-narrowing driver."""

from __future__ import annotations

import pytest

from shadows.config import SearchSettings
from shadows.geometry import ConvexPolygon, Vector2
from shadows.protocol import Clue
from shadows.search import NarrowOutcome, SearchNarrower, SearchState


@pytest.fixture
def narrower() -> SearchNarrower:
    return SearchNarrower(width=8, height=8)


class TestProbeSelection:
    def test_initial_state_is_full_board(self, narrower: SearchNarrower) -> None:
        state = narrower.initial_state(Vector2(0, 0))
        assert state.polygon == ConvexPolygon.board(8, 8)
        assert state.last_probe == state.previous_probe == Vector2(0, 0)
        assert state.turn == 0

    def test_first_probe_reflects_through_board_center(self, narrower: SearchNarrower) -> None:
        state = narrower.initial_state(Vector2(0, 0))
        assert state.polygon.centroid() == Vector2(3.5, 3.5)
        assert narrower.next_probe(state) == Vector2(7, 7)

    def test_probe_is_floored(self, narrower: SearchNarrower) -> None:
        state = narrower.initial_state(Vector2(1, 2))
        # 2 * 3.5 - (1, 2) = (6, 5)
        assert narrower.next_probe(state) == Vector2(6, 5)
        state = SearchState(
            polygon=ConvexPolygon.rectangle(0, 0, 3.5, 3),
            last_probe=Vector2(0, 0),
            previous_probe=Vector2(0, 0),
        )
        assert narrower.next_probe(state) == Vector2(3, 3)

    def test_probe_is_clamped_to_board(self, narrower: SearchNarrower) -> None:
        state = SearchState(
            polygon=ConvexPolygon.rectangle(5, 5, 7.5, 7.5),
            last_probe=Vector2(0, 0),
            previous_probe=Vector2(0, 0),
        )
        assert narrower.next_probe(state) == Vector2(7, 7)


class TestCutLine:
    def test_perpendicular_through_midpoint(self, narrower: SearchNarrower) -> None:
        line = narrower.cut_line(Vector2(0, 0), Vector2(4, 0))
        assert line is not None
        assert line.a == Vector2(2, 0)
        assert line.b == Vector2(2, 2)
        assert line.vec.dot(Vector2(4, 0)) == pytest.approx(0.0)

    def test_diagonal_move(self, narrower: SearchNarrower) -> None:
        line = narrower.cut_line(Vector2(0, 0), Vector2(7, 7))
        assert line is not None
        assert line.a == Vector2(3, 3)
        assert line.b == Vector2(-1, 7)

    def test_floored_midpoint_on_probe_uses_move_direction(self, narrower: SearchNarrower) -> None:
        line = narrower.cut_line(Vector2(1, 0), Vector2(0, 0))
        assert line is not None
        assert line.a == Vector2(0, 0)
        assert line.vec.dot(Vector2(-1, 0)) == pytest.approx(0.0)

    def test_no_move_has_no_line(self, narrower: SearchNarrower) -> None:
        assert narrower.cut_line(Vector2(3, 3), Vector2(3, 3)) is None

    def test_fast_rotation_keeps_perpendicular(self) -> None:
        fast = SearchNarrower(width=8, height=8, settings=SearchSettings(fast_rotation=True))
        line = fast.cut_line(Vector2(0, 0), Vector2(6, 2))
        assert line is not None
        assert line.vec.dot(Vector2(6, 2) - line.a) == pytest.approx(0.0, abs=1e-9)


class TestNarrow:
    def test_warmer_keeps_half_near_probe(self, narrower: SearchNarrower) -> None:
        state = narrower.initial_state(Vector2(0, 0))
        probe = narrower.next_probe(state)
        new_state, outcome = narrower.narrow(state, probe, Clue.WARMER)
        assert outcome is NarrowOutcome.NARROWED
        assert new_state.polygon.contains(Vector2(7, 7))
        assert not new_state.polygon.contains(Vector2(0, 0))
        assert new_state.polygon.area() == pytest.approx(39.5)
        c = new_state.polygon.centroid()
        assert c.x == pytest.approx(4.1)
        assert c.y == pytest.approx(4.1)

    def test_colder_keeps_half_far_from_probe(self, narrower: SearchNarrower) -> None:
        state = narrower.initial_state(Vector2(0, 0))
        new_state, outcome = narrower.narrow(state, Vector2(7, 7), Clue.COLDER)
        assert outcome is NarrowOutcome.NARROWED
        assert new_state.polygon.contains(Vector2(0, 0))
        assert not new_state.polygon.contains(Vector2(7, 7))
        assert new_state.polygon.area() == pytest.approx(24.5)

    def test_probe_history_advances(self, narrower: SearchNarrower) -> None:
        state = narrower.initial_state(Vector2(0, 0))
        new_state, _ = narrower.narrow(state, Vector2(7, 7), Clue.WARMER)
        assert new_state.last_probe == Vector2(7, 7)
        assert new_state.previous_probe == Vector2(0, 0)
        assert new_state.turn == 1

    def test_same_leaves_polygon_untouched(self, narrower: SearchNarrower, monkeypatch: pytest.MonkeyPatch) -> None:
        def _boom(self, *args, **kwargs):
            raise AssertionError("slice must not run on SAME")

        monkeypatch.setattr(ConvexPolygon, "slice", _boom)
        state = narrower.initial_state(Vector2(0, 0))
        new_state, outcome = narrower.narrow(state, Vector2(7, 7), Clue.SAME)
        assert outcome is NarrowOutcome.SAME_DISTANCE
        assert new_state.polygon is state.polygon
        assert new_state.last_probe == Vector2(7, 7)

    def test_clue_without_move_is_ignored(self, narrower: SearchNarrower) -> None:
        state = narrower.initial_state(Vector2(3, 3))
        new_state, outcome = narrower.narrow(state, Vector2(3, 3), Clue.WARMER)
        assert outcome is NarrowOutcome.NO_MOVE
        assert new_state.polygon is state.polygon

    def test_cut_missing_polygon_keeps_it(self) -> None:
        narrower = SearchNarrower(width=20, height=20)
        state = SearchState(
            polygon=ConvexPolygon.rectangle(0, 0, 2, 2),
            last_probe=Vector2(10, 10),
            previous_probe=Vector2(10, 10),
        )
        new_state, outcome = narrower.narrow(state, Vector2(12, 10), Clue.COLDER)
        assert outcome is NarrowOutcome.NO_BISECTION
        assert new_state.polygon is state.polygon
        assert new_state.turn == 1
