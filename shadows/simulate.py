"""Offline batch simulator: play many games against a simulated oracle."""

from __future__ import annotations

import argparse
import logging
from collections import Counter
from dataclasses import dataclass, field, replace

import numpy as np
from tqdm.auto import tqdm

from .config import SearchSettings, configure_logging
from .errors import ShadowsError
from .geometry import Vector2
from .oracle import BombOracle
from .search import NarrowOutcome, SearchNarrower

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GameResult:
    bomb: Vector2
    start: Vector2
    found: bool
    turns: int
    final_area: float
    outcomes: Counter = field(default_factory=Counter)
    error: str | None = None


def play_game(
    *,
    width: int,
    height: int,
    max_turns: int,
    bomb: Vector2,
    start: Vector2,
    settings: SearchSettings | None = None,
) -> GameResult:
    """Play until the bomb is hit or the turns run out. Geometry errors propagate."""
    oracle = BombOracle(width=width, height=height, bomb=bomb, position=start, turns_left=max_turns)
    narrower = SearchNarrower(width=width, height=height, settings=settings)
    state = narrower.initial_state(start)
    outcomes: Counter = Counter()

    while not oracle.finished:
        probe = narrower.next_probe(state)
        clue = oracle.answer(probe)
        if oracle.found:
            state = replace(state, last_probe=probe, previous_probe=state.last_probe, turn=state.turn + 1)
            break
        state, outcome = narrower.narrow(state, probe, clue)
        outcomes[outcome] += 1

    return GameResult(
        bomb=bomb,
        start=start,
        found=oracle.found,
        turns=state.turn,
        final_area=state.polygon.area(),
        outcomes=outcomes,
    )


def run_batch(
    *,
    games: int,
    width: int,
    height: int,
    max_turns: int,
    seed: int,
    settings: SearchSettings | None = None,
    progress: bool = True,
) -> list[GameResult]:
    rng = np.random.default_rng(seed)
    results: list[GameResult] = []

    game_iter = tqdm(range(games), desc="simulating", dynamic_ncols=True, disable=not progress)
    for _ in game_iter:
        bomb = Vector2(int(rng.integers(width)), int(rng.integers(height)))
        start = Vector2(int(rng.integers(width)), int(rng.integers(height)))
        try:
            result = play_game(
                width=width,
                height=height,
                max_turns=max_turns,
                bomb=bomb,
                start=start,
                settings=settings,
            )
        except ShadowsError as exc:
            logger.exception("Game with bomb %s from start %s aborted", bomb, start)
            result = GameResult(
                bomb=bomb,
                start=start,
                found=False,
                turns=0,
                final_area=float("nan"),
                error=str(exc),
            )
        results.append(result)
        game_iter.set_postfix(found=sum(r.found for r in results))

    return results


def summarize(results: list[GameResult]) -> dict[str, float]:
    if not results:
        return {"games": 0, "found_rate": 0.0, "errors": 0, "mean_turns_found": 0.0, "median_final_area": 0.0}
    found_turns = np.array([r.turns for r in results if r.found], dtype=float)
    areas = np.array([r.final_area for r in results if r.error is None], dtype=float)
    return {
        "games": len(results),
        "found_rate": float(np.mean([r.found for r in results])),
        "errors": sum(1 for r in results if r.error is not None),
        "mean_turns_found": float(np.mean(found_turns)) if found_turns.size else 0.0,
        "median_final_area": float(np.median(areas)) if areas.size else 0.0,
    }


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulate Shadows of the Knight games offline.")
    parser.add_argument("--games", type=int, default=None)
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--max-turns", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", type=str, default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--fast-rotation", dest="fast_rotation", action="store_true")
    parser.add_argument("--no-progress", dest="progress", action="store_false")
    parser.set_defaults(fast_rotation=None, progress=True)
    return parser


def main() -> None:
    args = _build_parser().parse_args()
    settings = SearchSettings.from_env()
    if args.games is not None:
        settings = replace(settings, sim_games=max(1, args.games))
    if args.width is not None:
        settings = replace(settings, sim_width=max(1, args.width))
    if args.height is not None:
        settings = replace(settings, sim_height=max(1, args.height))
    if args.max_turns is not None:
        settings = replace(settings, sim_max_turns=max(1, args.max_turns))
    if args.seed is not None:
        settings = replace(settings, sim_seed=args.seed)
    if args.log_level is not None:
        settings = replace(settings, log_level=args.log_level)
    if args.fast_rotation is not None:
        settings = replace(settings, fast_rotation=True)
    configure_logging(settings.log_level)

    print(
        f"simulating games={settings.sim_games} board={settings.sim_width}x{settings.sim_height} "
        f"max_turns={settings.sim_max_turns} seed={settings.sim_seed}",
        flush=True,
    )
    results = run_batch(
        games=settings.sim_games,
        width=settings.sim_width,
        height=settings.sim_height,
        max_turns=settings.sim_max_turns,
        seed=settings.sim_seed,
        settings=settings,
        progress=args.progress,
    )
    stats = summarize(results)
    outcomes: Counter = Counter()
    for r in results:
        outcomes.update(r.outcomes)
    print(
        f"found_rate={stats['found_rate']:.3f} "
        f"mean_turns_found={stats['mean_turns_found']:.1f} "
        f"median_final_area={stats['median_final_area']:.2f} "
        f"errors={stats['errors']}"
    )
    for outcome in NarrowOutcome:
        print(f"{outcome.value}={outcomes[outcome]}")


if __name__ == "__main__":
    main()
