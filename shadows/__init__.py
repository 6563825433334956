"""Polygon-slicing search bot for Shadows of the Knight, episode 2."""

from .errors import DegenerateGeometry, GeometryError, InvalidGeometry, ProtocolViolation, ShadowsError

__all__ = [
    "DegenerateGeometry",
    "GeometryError",
    "InvalidGeometry",
    "ProtocolViolation",
    "ShadowsError",
]
