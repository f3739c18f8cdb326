"""Single-rock descent through the chamber.

A rock spawns with its left edge SPAWN_X columns from the left wall and its
bottom row SPAWN_GAP empty rows above the tower. It then alternates between
being pushed by the next jet and falling one row, until a fall is blocked
and it settles where it is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .chamber import Chamber
from .geometry import DOWN, LEFT, RIGHT, Coord
from .jets import Cursor, Jet
from .rocks import RockShape

logger = logging.getLogger(__name__)

SPAWN_X = 2
SPAWN_GAP = 3


@dataclass
class Landing:
    """Where one rock came to rest."""

    rock: RockShape
    anchor: Coord       # top-left corner of the settled rock
    jets_used: int      # jet pushes consumed during the fall
    height_gain: int    # rows the tower grew by


class DropSimulator:
    """Drops rocks one at a time into a chamber.

    Usage:
        sim = DropSimulator(parse_jets(text), ROCK_CATALOG)
        for _ in range(2022):
            sim.drop()
        sim.chamber.tower_height()
    """

    def __init__(
        self,
        jets: Sequence[Jet],
        rocks: Sequence[RockShape],
        chamber: Chamber | None = None,
    ):
        self.chamber = chamber if chamber is not None else Chamber()
        self.jets = Cursor(jets)
        self.rocks = Cursor(rocks)
        for rock in self.rocks.items:
            if rock.width > self.chamber.width:
                raise ValueError(
                    f"{rock!r} is wider than the chamber ({self.chamber.width})"
                )
        self.rocks_dropped = 0

    @property
    def phase(self) -> tuple[int, int]:
        """(jet position, rock position) of the next drop."""
        return self.jets.position, self.rocks.position

    def spawn_anchor(self, rock: RockShape) -> Coord:
        x = min(SPAWN_X, self.chamber.width - rock.width)
        return Coord(x, self.chamber.tower_height() + SPAWN_GAP + rock.height)

    def drop(self) -> Landing:
        """Drop the next rock until it settles, then place it in the chamber."""
        rock = self.rocks.next()
        anchor = self.spawn_anchor(rock)
        height_before = self.chamber.tower_height()
        jets_used = 0

        while True:
            jet = self.jets.next()
            jets_used += 1
            anchor = self._push(rock, anchor, jet)

            below = anchor + DOWN
            if below.y - (rock.height - 1) < 0 or not self.chamber.can_place(rock, below):
                break
            anchor = below

        self.chamber.place(rock, anchor)
        self.rocks_dropped += 1
        gain = self.chamber.tower_height() - height_before
        logger.debug("%s settled at %s after %d jets (+%d)", rock.name, anchor, jets_used, gain)
        return Landing(rock, anchor, jets_used, gain)

    def _push(self, rock: RockShape, anchor: Coord, jet: Jet) -> Coord:
        """Apply one jet push, returning the anchor unchanged if it is blocked."""
        if jet is Jet.LEFT:
            if anchor.x - 1 < 0:
                return anchor
            moved = anchor + LEFT
        else:
            if anchor.x + rock.width >= self.chamber.width:
                return anchor
            moved = anchor + RIGHT
        return moved if self.chamber.can_place(rock, moved) else anchor
