"""Runtime tunables for the search bot and its offline simulator."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

# Cross-product slack when testing whether a point sits on a segment's line.
POINT_ON_LINE_TOLERANCE = 0.002
# Float slack for bounds checks and "same point" comparisons.
COORD_EPSILON = 1e-9
# Relative slack for "same vertex" checks on computed hits; scaled by the
# polygon's largest coordinate so large boards tolerate proportionally more
# rounding.
VERTEX_SNAP_RELATIVE = 1e-6

INITIAL_CLUE = "UNKNOWN"

SIM_WIDTH = 40
SIM_HEIGHT = 60
SIM_MAX_TURNS = 40
SIM_GAMES = 200
SIM_SEED = 1337


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip()
    return value if value else default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class SearchSettings:
    log_level: str = "WARNING"
    line_tolerance: float = POINT_ON_LINE_TOLERANCE
    fast_rotation: bool = False
    sim_width: int = SIM_WIDTH
    sim_height: int = SIM_HEIGHT
    sim_max_turns: int = SIM_MAX_TURNS
    sim_games: int = SIM_GAMES
    sim_seed: int = SIM_SEED

    @classmethod
    def from_env(cls) -> SearchSettings:
        defaults = cls()
        return cls(
            log_level=_env_str("SHADOWS_LOG_LEVEL", defaults.log_level).upper(),
            line_tolerance=max(0.0, _env_float("SHADOWS_LINE_TOLERANCE", defaults.line_tolerance)),
            fast_rotation=_env_bool("SHADOWS_FAST_ROTATION", defaults.fast_rotation),
            sim_width=max(1, _env_int("SHADOWS_SIM_WIDTH", defaults.sim_width)),
            sim_height=max(1, _env_int("SHADOWS_SIM_HEIGHT", defaults.sim_height)),
            sim_max_turns=max(1, _env_int("SHADOWS_SIM_MAX_TURNS", defaults.sim_max_turns)),
            sim_games=max(1, _env_int("SHADOWS_SIM_GAMES", defaults.sim_games)),
            sim_seed=_env_int("SHADOWS_SIM_SEED", defaults.sim_seed),
        )


def configure_logging(level: str) -> None:
    # stdout belongs to the referee protocol, so diagnostics always go to stderr.
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
