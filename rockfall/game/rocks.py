"""Rock formation definitions.

Each rock is a fixed set of (row, col) offsets from its anchor, the top-left
corner of its bounding box. Row increases downward, col increases rightward,
so a rock anchored at (x, y) covers rows y down to y - height + 1.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from .geometry import Coord


class RockType(IntEnum):
    HBAR = 0
    PLUS = 1
    ANGLE = 2
    VBAR = 3
    SQUARE = 4


# Fall order of the standard catalog.
ROCK_SHAPES: dict[RockType, list[tuple[int, int]]] = {
    RockType.HBAR: [(0, 0), (0, 1), (0, 2), (0, 3)],          # ####
    RockType.PLUS: [(0, 1), (1, 0), (1, 1), (1, 2), (2, 1)],  # .#. / ### / .#.
    RockType.ANGLE: [(0, 2), (1, 2), (2, 0), (2, 1), (2, 2)], # ..# / ..# / ###
    RockType.VBAR: [(0, 0), (1, 0), (2, 0), (3, 0)],          # |
    RockType.SQUARE: [(0, 0), (0, 1), (1, 0), (1, 1)],        # ##/##
}


@dataclass(frozen=True)
class RockShape:
    """An immutable rock formation."""

    name: str
    offsets: frozenset[tuple[int, int]]
    width: int = field(init=False)
    height: int = field(init=False)
    ordered: tuple[tuple[int, int], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.offsets:
            raise ValueError(f"rock {self.name!r} has no cells")
        if min(r for r, _ in self.offsets) < 0 or min(c for _, c in self.offsets) < 0:
            raise ValueError(f"rock {self.name!r} has negative offsets")
        object.__setattr__(self, "width", max(c for _, c in self.offsets) + 1)
        object.__setattr__(self, "height", max(r for r, _ in self.offsets) + 1)
        object.__setattr__(self, "ordered", tuple(sorted(self.offsets)))

    def cells_at(self, anchor: Coord) -> list[Coord]:
        """Absolute cells covered when the rock's top-left corner is at anchor."""
        return [Coord(anchor.x + c, anchor.y - r) for r, c in self.ordered]

    def __repr__(self):
        return f"RockShape({self.name}, {self.width}x{self.height})"


def make_shape(name: str, offsets) -> RockShape:
    """Build a RockShape from any iterable of (row, col) offsets."""
    return RockShape(name, frozenset((int(r), int(c)) for r, c in offsets))


ROCK_CATALOG: tuple[RockShape, ...] = tuple(
    make_shape(rock.name, ROCK_SHAPES[rock]) for rock in RockType
)
