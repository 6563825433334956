"""Search-space narrowing driven by WARMER / COLDER / SAME feedback."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from math import floor

from .config import SearchSettings
from .geometry import UNIT_Y, ZERO, ConvexPolygon, Segment, Vector2
from .protocol import Clue

logger = logging.getLogger(__name__)


def _clamp(value: float, min_value: float, max_value: float) -> float:
    return min(max(value, min_value), max_value)


class NarrowOutcome(str, Enum):
    NARROWED = "narrowed"
    SAME_DISTANCE = "same_distance"
    NO_BISECTION = "no_bisection"
    NO_MOVE = "no_move"


@dataclass(frozen=True, slots=True)
class SearchState:
    polygon: ConvexPolygon
    last_probe: Vector2
    previous_probe: Vector2
    turn: int = 0


class SearchNarrower:
    """Picks probes by reflecting through the search polygon's centroid and
    cuts the polygon along the perpendicular of each move.

    The narrower has no notion of having found the target; the referee's turn
    limit ends the game.
    """

    def __init__(self, *, width: int, height: int, settings: SearchSettings | None = None) -> None:
        self.width = width
        self.height = height
        self.settings = settings or SearchSettings()

    def initial_state(self, start: Vector2) -> SearchState:
        return SearchState(
            polygon=ConvexPolygon.board(self.width, self.height),
            last_probe=start,
            previous_probe=start,
        )

    def clamp_to_board(self, p: Vector2) -> Vector2:
        return Vector2(
            _clamp(p.x, 0, self.width - 1),
            _clamp(p.y, 0, self.height - 1),
        )

    def next_probe(self, state: SearchState) -> Vector2:
        center = state.polygon.centroid()
        probe = self.clamp_to_board(state.last_probe.reflect_through(center).apply(floor))
        logger.debug("search: %s", state.polygon)
        logger.debug("search pivot: %s; move %s -> %s", center, state.last_probe, probe)
        return probe

    def cut_line(self, previous: Vector2, probe: Vector2) -> Segment | None:
        """Line through the (floored) midpoint of previous->probe, perpendicular to the move.

        None when the probe did not move.
        """
        move = probe - previous
        if move == ZERO:
            return None
        mid = (move / 2.0 + previous).apply(floor)
        direction = probe - mid
        if direction == ZERO:
            direction = move
        mid_b = mid + direction.rotate_by(UNIT_Y, fast=self.settings.fast_rotation)
        return Segment(mid, mid_b)

    def narrow(self, state: SearchState, probe: Vector2, clue: Clue) -> tuple[SearchState, NarrowOutcome]:
        """Fold one clue for ``probe`` into the state.

        Geometry errors propagate; every other failure to narrow keeps the
        current polygon and only advances the probe history.
        """
        previous = state.last_probe
        advanced = replace(state, last_probe=probe, previous_probe=previous, turn=state.turn + 1)

        if clue is Clue.SAME:
            logger.debug("clue was SAME; no narrowing this turn")
            return advanced, NarrowOutcome.SAME_DISTANCE

        line = self.cut_line(previous, probe)
        if line is None:
            logger.warning("clue %s for a probe that did not move (%s); ignoring", clue.value, probe)
            return advanced, NarrowOutcome.NO_MOVE

        logger.debug("midline %s through %s and %s", line, line.a, line.b)
        shapes = state.polygon.slice(line.a, line.b, self.settings.line_tolerance)
        if len(shapes) < 2:
            logger.debug("midline does not bisect the search polygon")
            return advanced, NarrowOutcome.NO_BISECTION

        warm, cold = shapes
        if warm.centroid().distance_to(probe) > cold.centroid().distance_to(probe):
            warm, cold = cold, warm

        chosen = warm if clue is Clue.WARMER else cold
        logger.debug("warm = %s; cold = %s; chose %s", warm, cold, "warm" if chosen is warm else "cold")
        return replace(advanced, polygon=chosen), NarrowOutcome.NARROWED
