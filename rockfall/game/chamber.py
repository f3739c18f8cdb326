"""Chamber occupancy grid.

The chamber is CHAMBER_WIDTH columns wide and unbounded upward. Row 0 is a
synthetic floor that is always fully occupied. Settled rock cells are kept
in a boolean numpy grid (rows x width) that grows as the tower grows and
shrinks again when it is compacted onto a full row.
"""

from __future__ import annotations

import logging

import numpy as np

from .geometry import Coord
from .rocks import RockShape

logger = logging.getLogger(__name__)

CHAMBER_WIDTH = 7

# Minimum extra rows allocated whenever the grid needs to grow.
_GROW_ROWS = 64

# Rows below the top searched by seal().
SEAL_WINDOW = 64


class Chamber:
    """Occupancy of the vertical shaft.

    Usage:
        chamber = Chamber()
        if chamber.can_place(shape, anchor):
            chamber.place(shape, anchor)
        row = chamber.full_row_index()
        if row:
            chamber.compact(row)
    """

    def __init__(self, width: int = CHAMBER_WIDTH):
        if width < 1:
            raise ValueError(f"chamber width must be positive, got {width}")
        self.width = width
        self.grid: np.ndarray = np.zeros((_GROW_ROWS, width), dtype=bool)
        self.grid[0, :] = True
        self._top = 0
        self._full_row = 0

    # ── Queries ─────────────────────────────────────────────────────────────

    def tower_height(self) -> int:
        """Highest occupied row. The floor alone has height 0."""
        return self._top

    def can_place(self, shape: RockShape, anchor: Coord) -> bool:
        """True if none of the rock's cells at anchor is occupied.

        Walls and floor are the caller's business: x must already be inside
        [0, width). Rows above the stored grid are empty.
        """
        rows = self.grid.shape[0]
        for x, y in shape.cells_at(anchor):
            if 0 <= y < rows and self.grid[y, x]:
                return False
        return True

    def full_row_index(self) -> int:
        """Highest row above the floor that spans every column, or 0 if none."""
        return self._full_row

    def is_full(self, row: int) -> bool:
        return 0 <= row <= self._top and bool(self.grid[row].all())

    def fingerprint(self) -> tuple[int, bytes]:
        """Structural identity of the stored cells.

        Equal for any two chambers holding the same set of occupied cells.
        """
        return self.width, self.grid[: self._top + 1].tobytes()

    def cells(self) -> list[Coord]:
        """Occupied cells, floor included, in (x, y) order."""
        occupied = np.argwhere(self.grid[: self._top + 1])
        return sorted(Coord(int(x), int(y)) for y, x in occupied)

    # ── Mutation ────────────────────────────────────────────────────────────

    def place(self, shape: RockShape, anchor: Coord) -> None:
        """Mark every cell of the rock at anchor as occupied."""
        cells = shape.cells_at(anchor)
        for x, y in cells:
            if not 0 <= x < self.width or y < 0:
                raise ValueError(f"{shape!r} at {anchor} leaves the chamber at ({x}, {y})")

        highest = max(y for _, y in cells)
        self._ensure_rows(highest + 1)
        for x, y in cells:
            self.grid[y, x] = True
        self._top = max(self._top, highest)

        # Only rows touched by this rock can have just become full.
        for y in {y for _, y in cells}:
            if y > self._full_row and self.grid[y].all():
                self._full_row = y

    def compact(self, full_row_index: int) -> None:
        """Drop every row below full_row_index and make that row the new floor."""
        if full_row_index == 0:
            return
        if not self.is_full(full_row_index):
            raise ValueError(f"row {full_row_index} is not a full row")

        self.grid = self.grid[full_row_index:].copy()
        self._top -= full_row_index
        self._full_row = self._scan_full_row()
        logger.debug("Compacted %d rows, %d remain", full_row_index, self._top + 1)

    def seal(self) -> int:
        """Fill every empty cell that no falling rock can reach.

        A rock only ever moves left, right or down, so each of its cells
        traces such a path through empty cells from above the tower. Cells
        outside the flood fill of those moves are dead space and filling
        them does not change how any later rock falls.

        Only the top SEAL_WINDOW rows are searched. If the fill gets to the
        bottom of that window nothing is filled, since cells further down
        may still be reachable.

        Returns the number of cells filled.
        """
        top = self._top
        self._ensure_rows(top + 2)
        low = max(0, top + 1 - SEAL_WINDOW)
        occupied = self.grid[low : top + 2].tolist()
        rows = top + 2 - low

        reach = [[False] * self.width for _ in range(rows)]
        reach[rows - 1] = [True] * self.width
        stack = [(x, rows - 1) for x in range(self.width)]
        while stack:
            x, y = stack.pop()
            # Down is pushed last so open wells are found quickly.
            for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1)):
                if 0 <= nx < self.width and ny >= 0 and not reach[ny][nx] and not occupied[ny][nx]:
                    if ny == 0 and low > 0:
                        return 0
                    reach[ny][nx] = True
                    stack.append((nx, ny))

        dead = ~np.array(reach[: rows - 1], dtype=bool)
        window = self.grid[low : top + 1]
        filled = int((dead & ~window).sum())
        if filled:
            window |= dead
            full = np.flatnonzero(window.all(axis=1)) + low
            if full.size and full[-1] > self._full_row:
                self._full_row = int(full[-1])
        return filled

    def _ensure_rows(self, rows: int) -> None:
        if rows <= self.grid.shape[0]:
            return
        # Grow by at least the current size.
        grow = max(rows - self.grid.shape[0] + _GROW_ROWS, self.grid.shape[0])
        extra = np.zeros((grow, self.width), dtype=bool)
        self.grid = np.vstack([self.grid, extra])

    def _scan_full_row(self) -> int:
        full = np.flatnonzero(self.grid[1 : self._top + 1].all(axis=1))
        return int(full[-1]) + 1 if full.size else 0

    # ── Display ─────────────────────────────────────────────────────────────

    def render(self) -> str:
        """Render the chamber as ASCII art, top row first, floor last."""
        lines = []
        for y in range(self._top, 0, -1):
            row_str = "".join("#" if cell else "." for cell in self.grid[y])
            lines.append("|" + row_str + "|")
        lines.append("+" + "-" * self.width + "+")
        return "\n".join(lines)

    def __repr__(self):
        return self.render()
