"""Entry point: python -m rockfall INPUT

Reads a jet pattern, drops rocks from the standard catalog and prints the
tower height after --rocks rocks, extrapolated once the simulation repeats.
"""

import argparse
import logging
import sys

from .analysis.cycle import (
    DEFAULT_MAX_ROCKS,
    DEFAULT_TARGET,
    CycleDetector,
    CycleNotFoundError,
    DetectorSettings,
    SnapshotStrategy,
)
from .game.jets import load_jets
from .game.rocks import ROCK_CATALOG

logger = logging.getLogger("rockfall")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rockfall", description="Tower height after falling rocks settle"
    )
    parser.add_argument("input", help="Path to the jet pattern file")
    parser.add_argument("--rocks", type=int, default=DEFAULT_TARGET,
                        help=f"Rocks to drop (default {DEFAULT_TARGET})")
    parser.add_argument("--max-rocks", type=int, default=DEFAULT_MAX_ROCKS,
                        help=f"Give up if no cycle within this many rocks (default {DEFAULT_MAX_ROCKS})")
    parser.add_argument("--strategy", choices=[s.value for s in SnapshotStrategy],
                        default=SnapshotStrategy.SEALED.value,
                        help="Chamber normalisation before comparing states (default sealed)")
    parser.add_argument("--no-phase", action="store_true",
                        help="Compare chamber shape only, ignoring jet/rock position")
    parser.add_argument("--render", action="store_true",
                        help="Print the compacted chamber to stderr when done")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.rocks < 0:
        parser.error("--rocks must be non-negative")

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        jets = load_jets(args.input)
    except (OSError, ValueError) as e:
        logger.error("Cannot read jet pattern %s: %s", args.input, e)
        return 1

    settings = DetectorSettings(
        strategy=SnapshotStrategy(args.strategy),
        include_phase=not args.no_phase,
        max_rocks=args.max_rocks,
    )
    detector = CycleDetector(jets, ROCK_CATALOG, settings)
    try:
        result = detector.run(args.rocks)
    except CycleNotFoundError as e:
        hint = "a larger --max-rocks"
        if settings.strategy is SnapshotStrategy.FULL_ROW:
            hint += " or --strategy sealed"
        logger.error("%s; try %s", e, hint)
        return 1

    if args.render:
        print(detector.chamber.render(), file=sys.stderr)
    logger.info("Simulated %d of %d rocks", result.simulated_rocks, result.target)
    print(result.height)
    return 0


if __name__ == "__main__":
    sys.exit(main())
