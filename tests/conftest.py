"""Shared fixtures for the shadows test suite."""

from __future__ import annotations

import pytest

from shadows.geometry import ConvexPolygon, Vector2


@pytest.fixture
def square() -> ConvexPolygon:
    """4x4 axis-aligned square with a corner on the origin."""
    return ConvexPolygon.rectangle(0, 0, 4, 4)


@pytest.fixture
def pentagon() -> ConvexPolygon:
    """Irregular convex pentagon with area 21."""
    return ConvexPolygon(
        [
            Vector2(0, 0),
            Vector2(4, 0),
            Vector2(5, 3),
            Vector2(2, 5),
            Vector2(-1, 3),
        ]
    )
