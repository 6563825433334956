"""Referee turn protocol: setup block, clue tokens, probe lines."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import IO

from .errors import ProtocolViolation
from .geometry import Vector2


class Clue(str, Enum):
    WARMER = "WARMER"
    COLDER = "COLDER"
    SAME = "SAME"
    UNKNOWN = "UNKNOWN"


TURN_CLUES = frozenset({Clue.WARMER, Clue.COLDER, Clue.SAME})


@dataclass(frozen=True, slots=True)
class GameSetup:
    width: int
    height: int
    max_turns: int
    start: Vector2


def _read_line(stream: IO[str], what: str) -> str:
    line = stream.readline()
    if not line:
        raise ProtocolViolation(f"Input ended while reading {what}")
    return line


def _read_ints(stream: IO[str], count: int, what: str) -> list[int]:
    tokens = _read_line(stream, what).split()
    if len(tokens) != count:
        raise ProtocolViolation(f"Expected {count} integer(s) for {what}, got {tokens!r}")
    try:
        return [int(t) for t in tokens]
    except ValueError:
        raise ProtocolViolation(f"Expected {count} integer(s) for {what}, got {tokens!r}") from None


def parse_clue(token: str) -> Clue:
    """Map a per-turn token to a Clue; anything but WARMER/COLDER/SAME is a violation."""
    value = token.strip()
    try:
        clue = Clue(value)
    except ValueError:
        raise ProtocolViolation(f"Unknown clue token {value!r}") from None
    if clue not in TURN_CLUES:
        raise ProtocolViolation(f"Clue {value!r} is only valid before the first turn")
    return clue


def read_setup(stream: IO[str]) -> GameSetup:
    width, height = _read_ints(stream, 2, "board size")
    if width <= 0 or height <= 0:
        raise ProtocolViolation(f"Board size must be positive, got {width}x{height}")
    (max_turns,) = _read_ints(stream, 1, "turn limit")
    start_x, start_y = _read_ints(stream, 2, "start position")
    if not (0 <= start_x < width and 0 <= start_y < height):
        raise ProtocolViolation(f"Start position {start_x},{start_y} is outside the {width}x{height} board")
    # The first clue carries no information; it is always the UNKNOWN sentinel.
    _read_line(stream, "initial clue")
    return GameSetup(width=width, height=height, max_turns=max_turns, start=Vector2(start_x, start_y))


def read_clue(stream: IO[str]) -> Clue | None:
    """Next turn's clue, or None once the referee closes the stream."""
    line = stream.readline()
    if not line:
        return None
    return parse_clue(line)


def format_probe(probe: Vector2) -> str:
    return f"{int(probe.x)} {int(probe.y)}"


def write_probe(stream: IO[str], probe: Vector2) -> None:
    print(format_probe(probe), file=stream, flush=True)
