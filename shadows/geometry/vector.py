"""Immutable 2D point / vector."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from math import sqrt

# 1 - 1/sqrt(2) and 2 - 1/sqrt(2), the octagon coefficients.
_OCT_A = 0.29289
_OCT_B = 1.29289


@dataclass(frozen=True, slots=True)
class Vector2:
    x: float
    y: float

    def __str__(self) -> str:
        return f"{self.x:.2f} {self.y:.2f}"

    def __iter__(self):
        return iter((self.x, self.y))

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return -other + self

    def __mul__(self, n: float) -> Vector2:
        return Vector2(self.x * n, self.y * n)

    def __rmul__(self, n: float) -> Vector2:
        return self * n

    def __truediv__(self, n: float) -> Vector2:
        return Vector2(self.x / n, self.y / n)

    def apply(self, fn: Callable[[float], float]) -> Vector2:
        return Vector2(fn(self.x), fn(self.y))

    def slope(self) -> float:
        return self.y / self.x if self.x != 0 else 0.0

    def islope(self) -> float:
        return self.x / self.y if self.y != 0 else 0.0

    def magnitude(self) -> float:
        return sqrt(self.x * self.x + self.y * self.y)

    def manhattan_magnitude(self) -> float:
        return abs(self.x) + abs(self.y)

    def unit_vector(self) -> Vector2:
        """Raises ZeroDivisionError for the zero vector."""
        return self / self.magnitude()

    def fast_unit_vector(self) -> Vector2:
        """Approximate unit vector without a square root.

        The length estimate traces an octagon inscribed in the unit circle, so
        the result keeps the exact direction and a length within about 5% of 1.
        """
        ax = abs(self.x)
        ay = abs(self.y)
        ratio = 1.0 / max(ax, ay)
        ratio = ratio * (_OCT_B - (ax + ay) * ratio * _OCT_A)
        return Vector2(self.x * ratio, self.y * ratio)

    def rotate_by(self, vec: Vector2, *, fast: bool = False) -> Vector2:
        """Rotate by the angle ``vec`` makes with the +x axis.

        Only the direction of ``vec`` matters; it is normalized before the
        complex multiplication.
        """
        u = vec.fast_unit_vector() if fast else vec.unit_vector()
        return Vector2(
            self.x * u.x - self.y * u.y,
            self.x * u.y + self.y * u.x,
        )

    def cross(self, other: Vector2) -> float:
        return self.x * other.y - self.y * other.x

    def dot(self, other: Vector2) -> float:
        return self.x * other.x + self.y * other.y

    def distance_to(self, other: Vector2) -> float:
        return (other - self).magnitude()

    def reflect_through(self, center: Vector2) -> Vector2:
        return center * 2.0 - self

    def is_close(self, other: Vector2, eps: float) -> bool:
        return abs(self.x - other.x) <= eps and abs(self.y - other.y) <= eps


ZERO = Vector2(0.0, 0.0)
UNIT_X = Vector2(1.0, 0.0)
UNIT_Y = Vector2(0.0, 1.0)
