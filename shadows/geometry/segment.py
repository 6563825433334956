"""Directed line through two points."""

from __future__ import annotations

from dataclasses import dataclass, field

from .. import config
from ..errors import InvalidGeometry
from .vector import Vector2


def _within(n: float, low: float, high: float, eps: float) -> bool:
    if low > high:
        low, high = high, low
    return low - eps <= n <= high + eps


@dataclass(frozen=True, slots=True)
class Segment:
    """Line segment A->B that doubles as its infinite-line extension.

    ``slope`` and ``lift`` (the y-intercept) describe the extension; whether a
    point actually lies between A and B is ``point_in_segment``'s business.
    """

    a: Vector2
    b: Vector2
    vec: Vector2 = field(init=False, repr=False, compare=False)
    slope: float = field(init=False, repr=False, compare=False)
    lift: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        vec = self.b - self.a
        if vec.manhattan_magnitude() == 0.0:
            raise InvalidGeometry(f"The points given do not describe a valid line: A == B == {self.a}")
        # A vertical travel vector collapses to slope 0; lift is unreliable there.
        slope = vec.slope()
        object.__setattr__(self, "vec", vec)
        object.__setattr__(self, "slope", slope)
        object.__setattr__(self, "lift", -slope * self.a.x + self.a.y)

    def __str__(self) -> str:
        return f"[y = {self.slope:.3f}x + {self.lift:.3f}]"

    def intersection(self, other: Segment) -> Vector2 | None:
        """Where the infinite extensions of both segments cross, or None when parallel."""
        vec_a = self.vec
        vec_b = other.vec
        vec_c = self.a - other.a

        denom = vec_a.cross(vec_b)
        if denom == 0.0:
            return None

        t = vec_b.cross(vec_c) / denom
        return self.a + vec_a * t

    def point_in_segment(
        self,
        p: Vector2,
        tolerance: float = config.POINT_ON_LINE_TOLERANCE,
        eps: float = config.COORD_EPSILON,
    ) -> bool:
        on_line = p == self.a or abs(self.vec.cross(p - self.a)) <= tolerance
        in_bounds = _within(p.x, self.a.x, self.b.x, eps) and _within(p.y, self.a.y, self.b.y, eps)
        return on_line and in_bounds

    def parallel(self, other: Segment) -> bool:
        return self.vec.cross(other.vec) == 0.0

    def same_line(self, other: Segment, tolerance: float = config.POINT_ON_LINE_TOLERANCE) -> bool:
        # lift is undefined for vertical lines, so compare by cross product.
        return self.parallel(other) and abs(self.vec.cross(other.a - self.a)) <= tolerance
