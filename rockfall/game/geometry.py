"""Integer grid coordinates for the chamber.

x is the column (0 = left wall side), y is the row (0 = floor, growing upward).
"""

from typing import NamedTuple


class Coord(NamedTuple):
    x: int
    y: int

    def __add__(self, other: "Coord") -> "Coord":
        return Coord(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Coord") -> "Coord":
        return Coord(self.x - other.x, self.y - other.y)


LEFT = Coord(-1, 0)
RIGHT = Coord(1, 0)
DOWN = Coord(0, -1)
