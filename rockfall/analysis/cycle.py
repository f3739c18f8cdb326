"""Cycle detection and height extrapolation.

After every settled rock the chamber is normalised onto its highest full
row. The normalised chamber, together with the jet and rock phase, is a
complete description of the simulation's future. The first time such a state
repeats, the rocks and height between the two occurrences form a period, and
the height after any number of rocks follows arithmetically:

    height(N) = h1 + ((N - r1) // period) * gain + (height(r1 + rem) - h1)

where (r1, h1) is the first occurrence and rem = (N - r1) % period.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from itertools import islice
from typing import Hashable, Sequence

from ..game.chamber import CHAMBER_WIDTH, Chamber
from ..game.drop import DropSimulator
from ..game.jets import Jet
from ..game.rocks import RockShape

logger = logging.getLogger(__name__)

DEFAULT_TARGET = 1_000_000_000_000
DEFAULT_MAX_ROCKS = 100_000


class SnapshotStrategy(str, Enum):
    """How the chamber is normalised before it is compared."""

    # Snapshot only when rocks complete a row, compacting onto it.
    FULL_ROW = "full-row"
    # Fill unreachable dead space first, so the reachable surface always
    # sits on a full row and every rock yields a snapshot.
    SEALED = "sealed"


@dataclass
class DetectorSettings:
    """Tunable knobs for cycle detection."""

    strategy: SnapshotStrategy = SnapshotStrategy.SEALED
    # Key snapshots by (jet position, rock position) as well as by shape.
    # Without it, two phases with the same surface are taken for a cycle.
    include_phase: bool = True
    # Give up when this many rocks settle without a repeated state.
    max_rocks: int = DEFAULT_MAX_ROCKS
    width: int = CHAMBER_WIDTH


DEFAULT_SETTINGS = DetectorSettings()


class CycleNotFoundError(RuntimeError):
    """Raised when no state repeats within the configured number of rocks."""

    def __init__(self, max_rocks: int):
        self.max_rocks = max_rocks
        super().__init__(f"no repeating state within {max_rocks} rocks")


@dataclass
class Snapshot:
    """First sighting of a normalised chamber state."""

    index: int                  # insertion order among snapshots
    rocks: int                  # rocks settled when it was taken
    height: int                 # cumulative tower height at that point
    # rock count -> cumulative height, for every rock since the previous snapshot
    ledger: dict[int, int] = field(default_factory=dict)


@dataclass
class Cycle:
    start_rocks: int
    start_height: int
    period: int
    height_per_period: int


@dataclass
class Extrapolation:
    target: int
    height: int
    simulated_rocks: int
    cycle: Cycle | None = None


class CycleDetector:
    """Runs the simulation until its state repeats, then extrapolates.

    Usage:
        detector = CycleDetector(jets, ROCK_CATALOG)
        result = detector.run(1_000_000_000_000)
        result.height
    """

    def __init__(
        self,
        jets: Sequence[Jet],
        rocks: Sequence[RockShape],
        settings: DetectorSettings | None = None,
    ):
        self.settings = settings or DEFAULT_SETTINGS
        self.simulator = DropSimulator(jets, rocks, Chamber(self.settings.width))
        self.snapshots: dict[Hashable, Snapshot] = {}
        self.rocks_settled = 0
        self.tower_height = 0
        self.cycle: Cycle | None = None
        self.duplicate_index: int | None = None
        self._ledger: dict[int, int] = {}

    @property
    def chamber(self) -> Chamber:
        return self.simulator.chamber

    def state_key(self) -> Hashable:
        if self.settings.include_phase:
            return self.simulator.phase, self.chamber.fingerprint()
        return self.chamber.fingerprint()

    def step(self) -> Snapshot | None:
        """Drop one rock and record it.

        Returns the earlier snapshot if the state after this rock repeats it.
        """
        landing = self.simulator.drop()
        self.rocks_settled += 1
        self.tower_height += landing.height_gain
        self._ledger[self.rocks_settled] = self.tower_height

        chamber = self.chamber
        if self.settings.strategy is SnapshotStrategy.SEALED:
            chamber.seal()
        row = chamber.full_row_index()
        if row == 0:
            return None
        chamber.compact(row)

        key = self.state_key()
        first = self.snapshots.get(key)
        if first is not None:
            return first

        self.snapshots[key] = Snapshot(
            len(self.snapshots), self.rocks_settled, self.tower_height, self._ledger
        )
        self._ledger = {}
        logger.debug(
            "Snapshot %d at rock %d, height %d",
            len(self.snapshots) - 1, self.rocks_settled, self.tower_height,
        )
        return None

    def run(self, target: int = DEFAULT_TARGET) -> Extrapolation:
        """Height of the tower after target rocks."""
        if target < 0:
            raise ValueError(f"target must be non-negative, got {target}")
        if target <= self.rocks_settled:
            return Extrapolation(target, self.height_at(target), self.rocks_settled, self.cycle)
        if self.cycle is not None:
            return Extrapolation(target, self._extrapolate(target), self.rocks_settled, self.cycle)

        while self.rocks_settled < target:
            if self.rocks_settled >= self.settings.max_rocks:
                raise CycleNotFoundError(self.settings.max_rocks)

            first = self.step()
            if first is None:
                continue

            self.duplicate_index = first.index
            self.cycle = Cycle(
                start_rocks=first.rocks,
                start_height=first.height,
                period=self.rocks_settled - first.rocks,
                height_per_period=self.tower_height - first.height,
            )
            logger.info(
                "Cycle found at rock %d: repeats snapshot %d from rock %d, "
                "%d rocks per period gaining %d height",
                self.rocks_settled, first.index, first.rocks,
                self.cycle.period, self.cycle.height_per_period,
            )
            return Extrapolation(target, self._extrapolate(target), self.rocks_settled, self.cycle)

        return Extrapolation(target, self.tower_height, self.rocks_settled, None)

    def height_at(self, rocks: int, start_index: int = 0) -> int:
        """Recorded cumulative height after the given number of settled rocks.

        Only snapshots from start_index on (plus the running ledger) are searched.
        """
        if rocks == 0:
            return 0
        if rocks in self._ledger:
            return self._ledger[rocks]
        for snapshot in islice(self.snapshots.values(), start_index, None):
            if rocks in snapshot.ledger:
                return snapshot.ledger[rocks]
        raise KeyError(f"no height recorded for rock {rocks}")

    def _extrapolate(self, target: int) -> int:
        cycle = self.cycle
        periods, remainder = divmod(target - cycle.start_rocks, cycle.period)
        partial = self.height_at(cycle.start_rocks + remainder, self.duplicate_index) - cycle.start_height
        height = cycle.start_height + periods * cycle.height_per_period + partial
        logger.info(
            "%d + %d periods x %d + %d from %d leftover rocks = %d",
            cycle.start_height, periods, cycle.height_per_period, partial, remainder, height,
        )
        return height


def tower_height_after(
    jets: Sequence[Jet],
    rocks: Sequence[RockShape],
    target: int = DEFAULT_TARGET,
    settings: DetectorSettings | None = None,
) -> int:
    """Tower height after target rocks, extrapolated once the state repeats."""
    return CycleDetector(jets, rocks, settings).run(target).height
