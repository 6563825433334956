"""Error kinds raised by the geometry layer and the turn protocol."""

from __future__ import annotations


class ShadowsError(ValueError):
    """Base class for every fatal condition the bot can hit."""


class GeometryError(ShadowsError):
    """A geometric primitive could not be built or operated on."""


class InvalidGeometry(GeometryError):
    """A line or segment was built from two identical points, or a polygon from too few."""


class DegenerateGeometry(GeometryError):
    """A cut crossed an assumed-convex polygon more than twice."""


class ProtocolViolation(ShadowsError):
    """The referee sent something outside the turn protocol."""
