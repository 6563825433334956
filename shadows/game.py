"""Play one game against the referee over stdin/stdout."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import IO

from .config import SearchSettings, configure_logging
from .errors import ShadowsError
from .protocol import read_clue, read_setup, write_probe
from .search import SearchNarrower, SearchState

logger = logging.getLogger(__name__)


def run_game(stdin: IO[str], stdout: IO[str], settings: SearchSettings | None = None) -> SearchState:
    """Run the probe/clue loop until the referee closes the input.

    Returns the final search state. Protocol and geometry errors propagate.
    """
    setup = read_setup(stdin)
    logger.info(
        "board %dx%d, max turns %d, starting at %s",
        setup.width,
        setup.height,
        setup.max_turns,
        setup.start,
    )

    narrower = SearchNarrower(width=setup.width, height=setup.height, settings=settings)
    state = narrower.initial_state(setup.start)

    while True:
        probe = narrower.next_probe(state)
        write_probe(stdout, probe)

        clue = read_clue(stdin)
        if clue is None:
            logger.info("input closed after %d turn(s)", state.turn)
            return state

        state, outcome = narrower.narrow(state, probe, clue)
        logger.debug("turn %d: %s -> %s", state.turn, clue.value, outcome.value)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Shadows of the Knight (episode 2) search bot.")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostics level on stderr (defaults to SHADOWS_LOG_LEVEL)",
    )
    parser.add_argument("--fast-rotation", dest="fast_rotation", action="store_true")
    parser.set_defaults(fast_rotation=None)
    return parser


def main() -> None:
    args = _build_parser().parse_args()
    settings = SearchSettings.from_env()
    if args.log_level is not None:
        settings = replace(settings, log_level=args.log_level)
    if args.fast_rotation is not None:
        settings = replace(settings, fast_rotation=True)
    configure_logging(settings.log_level)

    try:
        run_game(sys.stdin, sys.stdout, settings)
    except ShadowsError:
        logger.exception("search aborted")
        sys.exit(1)


if __name__ == "__main__":
    main()
