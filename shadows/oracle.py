"""Simulated referee that hides a bomb and answers each probe with a clue."""

from __future__ import annotations

from dataclasses import dataclass, field

from .geometry import Vector2
from .protocol import Clue


def _distance_sq(a: Vector2, b: Vector2) -> float:
    d = a - b
    return d.dot(d)


@dataclass(slots=True)
class BombOracle:
    width: int
    height: int
    bomb: Vector2
    position: Vector2
    turns_left: int
    history: list[Vector2] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not (0 <= self.bomb.x < self.width and 0 <= self.bomb.y < self.height):
            raise ValueError(f"Bomb {self.bomb} lies outside the {self.width}x{self.height} board")

    @property
    def found(self) -> bool:
        return self.position == self.bomb

    @property
    def finished(self) -> bool:
        return self.found or self.turns_left <= 0

    def setup_lines(self) -> list[str]:
        return [
            f"{self.width} {self.height}",
            f"{self.turns_left}",
            f"{int(self.position.x)} {int(self.position.y)}",
            Clue.UNKNOWN.value,
        ]

    def answer(self, probe: Vector2) -> Clue:
        """Move to ``probe`` and compare its distance to the bomb against the last position."""
        if not (0 <= probe.x < self.width and 0 <= probe.y < self.height):
            raise ValueError(f"Probe {probe} lies outside the {self.width}x{self.height} board")

        before = _distance_sq(self.position, self.bomb)
        after = _distance_sq(probe, self.bomb)
        self.position = probe
        self.history.append(probe)
        self.turns_left -= 1

        if after < before:
            return Clue.WARMER
        if after > before:
            return Clue.COLDER
        return Clue.SAME
