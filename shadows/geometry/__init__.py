"""2D geometry used by the search narrowing."""

from .polygon import ConvexPolygon, Rect
from .segment import Segment
from .vector import UNIT_X, UNIT_Y, ZERO, Vector2

__all__ = [
    "ConvexPolygon",
    "Rect",
    "Segment",
    "UNIT_X",
    "UNIT_Y",
    "Vector2",
    "ZERO",
]
