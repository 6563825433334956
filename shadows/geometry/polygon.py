"""Convex polygon slicing for the search-space narrowing."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from .. import config
from ..errors import DegenerateGeometry, InvalidGeometry
from .segment import Segment
from .vector import Vector2

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Rect:
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def to_polygon(self) -> ConvexPolygon:
        return ConvexPolygon.rectangle(self.left, self.top, self.right, self.bottom)


def _dedupe(points: Sequence[Vector2], eps: float = config.COORD_EPSILON) -> list[Vector2]:
    """Drop consecutive near-identical points, wrap-around included."""
    kept: list[Vector2] = []
    for p in points:
        if kept and kept[-1].is_close(p, eps):
            continue
        kept.append(p)
    while len(kept) > 1 and kept[-1].is_close(kept[0], eps):
        kept.pop()
    return kept


@dataclass(frozen=True, slots=True, init=False)
class ConvexPolygon:
    """Closed vertex ring; edge i runs from vertex i to vertex i+1 (mod n).

    Vertices must be convex and wound consistently. Slicing gives wrong
    answers for anything else; it only notices when a cut crosses the
    boundary more than twice.
    """

    vertices: tuple[Vector2, ...]

    def __init__(self, vertices: Sequence[Vector2]) -> None:
        verts = tuple(vertices)
        if len(verts) < 3:
            raise InvalidGeometry(f"A polygon needs at least 3 vertices, got {len(verts)}")
        object.__setattr__(self, "vertices", verts)

    @classmethod
    def rectangle(cls, left: float, top: float, right: float, bottom: float) -> ConvexPolygon:
        return cls(
            (
                Vector2(left, top),
                Vector2(right, top),
                Vector2(right, bottom),
                Vector2(left, bottom),
            )
        )

    @classmethod
    def board(cls, width: int, height: int) -> ConvexPolygon:
        """The area covered by a width x height grid of unit cells centred on integer points."""
        return cls.rectangle(-0.5, -0.5, width - 0.5, height - 0.5)

    def __len__(self) -> int:
        return len(self.vertices)

    def __str__(self) -> str:
        return "poly[" + ", ".join(str(v) for v in self.vertices) + "]"

    def snap_epsilon(self) -> float:
        """Distance under which two computed points count as the same vertex."""
        scale = max(max(abs(v.x), abs(v.y)) for v in self.vertices)
        return max(config.COORD_EPSILON, config.VERTEX_SNAP_RELATIVE * scale)

    def edges(self):
        n = len(self.vertices)
        for i in range(n):
            yield i, self.vertices[i], self.vertices[(i + 1) % n]

    def intersections_with_line(
        self,
        a: Vector2,
        b: Vector2,
        tolerance: float = config.POINT_ON_LINE_TOLERANCE,
    ) -> list[tuple[Vector2, int]]:
        """Points where the infinite line a->b crosses this polygon's boundary.

        Each hit is paired with the index of the edge it lies on. A convex
        polygon yields 0 hits when the line misses, 1 when it only touches a
        vertex, and 2 otherwise. Edges collinear with the line never count.
        """
        line_cast = Segment(a, b)
        eps = self.snap_epsilon()
        hits: list[tuple[Vector2, int]] = []

        for i, start, end in self.edges():
            side = Segment(start, end)
            point = side.intersection(line_cast)
            if point is None:
                logger.debug("side %s -> %s: parallel to cut; skipping", start, end)
                continue

            # A vertex shared by two edges is reported by the edge it starts.
            if point.is_close(end, eps):
                logger.debug("side %s -> %s: hit %s is the far endpoint; skipping", start, end, point)
                continue

            if not side.point_in_segment(point, tolerance, eps):
                continue

            if any(point.is_close(seen, eps) for seen, _ in hits):
                logger.debug("side %s -> %s: hit %s repeats an earlier vertex; skipping", start, end, point)
                continue

            logger.debug("side %s -> %s: hit %s accepted", start, end, point)
            hits.append((point, i))

        logger.debug("found %d intersections for line %s", len(hits), line_cast)
        return hits

    def slice(
        self,
        a: Vector2,
        b: Vector2,
        tolerance: float = config.POINT_ON_LINE_TOLERANCE,
    ) -> tuple[ConvexPolygon, ...]:
        """Split along the line a->b.

        Returns the two pieces on either side, or ``(self,)`` when the line
        does not properly bisect the polygon.
        """
        hits = self.intersections_with_line(a, b, tolerance)

        if len(hits) < 2:
            return (self,)

        if len(hits) > 2:
            points = ", ".join(str(p) for p, _ in hits)
            raise DegenerateGeometry(
                f"Cut {Segment(a, b)} crossed {self} {len(hits)} times ({points}); the polygon is not convex"
            )

        (p_a, idx_a), (p_b, idx_b) = hits
        verts = self.vertices
        eps = self.snap_epsilon()

        piece_a = _dedupe([p_a, *verts[idx_a + 1 : idx_b + 1], p_b], eps)
        piece_b = _dedupe([p_b, *verts[idx_b + 1 :], *verts[: idx_a + 1], p_a], eps)

        if len(piece_a) < 3 or len(piece_b) < 3:
            logger.debug("cut through %s leaves a sliver; treating as no bisection", self)
            return (self,)

        return (ConvexPolygon(piece_a), ConvexPolygon(piece_b))

    def centroid(self) -> Vector2:
        """Vertex average; close enough to the area centroid for near-regular shapes."""
        total = Vector2(0.0, 0.0)
        for v in self.vertices:
            total = total + v
        return total / len(self.vertices)

    def bounding_box(self) -> Rect:
        xs = [v.x for v in self.vertices]
        ys = [v.y for v in self.vertices]
        return Rect(left=min(xs), top=min(ys), right=max(xs), bottom=max(ys))

    def area(self) -> float:
        xs = np.array([v.x for v in self.vertices], dtype=float)
        ys = np.array([v.y for v in self.vertices], dtype=float)
        return 0.5 * abs(float(np.dot(xs, np.roll(ys, -1)) - np.dot(ys, np.roll(xs, -1))))

    def contains(self, p: Vector2, tolerance: float = config.COORD_EPSILON) -> bool:
        """True when p is inside or on the boundary."""
        sign = 0
        for _, start, end in self.edges():
            side = (end - start).cross(p - start)
            if abs(side) <= tolerance:
                continue
            current = 1 if side > 0 else -1
            if sign == 0:
                sign = current
            elif current != sign:
                return False
        return True
