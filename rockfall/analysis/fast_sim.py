"""Numba-accelerated brute-force simulation.

Drops every rock, no compaction and no cycle detection, and records the
tower height after each one. Used as the reference that extrapolated
heights are checked against; fast enough to brute force a few million
rocks where the pure Python DropSimulator would take minutes.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numba import njit

from ..game.chamber import CHAMBER_WIDTH
from ..game.drop import SPAWN_GAP, SPAWN_X
from ..game.jets import Jet
from ..game.rocks import RockShape


def pack_rocks(rocks: Sequence[RockShape]):
    """Flatten rock shapes into numpy arrays for Numba.

    Returns (cells, counts, widths, heights) where cells[i, k] is the
    (row, col) offset of the k-th cell of rock i, padded to the largest rock.
    """
    if not rocks:
        raise ValueError("cannot cycle over an empty sequence")
    max_cells = max(len(rock.offsets) for rock in rocks)
    cells = np.zeros((len(rocks), max_cells, 2), dtype=np.int64)
    counts = np.zeros(len(rocks), dtype=np.int64)
    for i, rock in enumerate(rocks):
        for k, (r, c) in enumerate(rock.ordered):
            cells[i, k, 0] = r
            cells[i, k, 1] = c
        counts[i] = len(rock.offsets)
    widths = np.array([rock.width for rock in rocks], dtype=np.int64)
    heights = np.array([rock.height for rock in rocks], dtype=np.int64)
    return cells, counts, widths, heights


@njit(cache=True)
def _fits(grid, cells, count, x, y):
    for i in range(count):
        if grid[y - cells[i, 0], x + cells[i, 1]]:
            return False
    return True


@njit(cache=True)
def simulate_heights(jets, cells, counts, widths, heights, width, n_rocks):
    """Tower height after each of n_rocks drops.

    jets: (J,) int64 of -1 (left) / +1 (right)
    cells, counts, widths, heights: see pack_rocks
    Returns (n_rocks + 1,) int64; index 0 is the bare floor.
    """
    max_height = heights.max()
    capacity = (n_rocks + 1) * max_height + SPAWN_GAP + 2
    grid = np.zeros((capacity, width), dtype=np.bool_)
    grid[0, :] = True
    out = np.zeros(n_rocks + 1, dtype=np.int64)

    n_jets = jets.shape[0]
    n_shapes = counts.shape[0]
    top = 0
    j = 0
    for k in range(n_rocks):
        s = k % n_shapes
        rock = cells[s]
        count = counts[s]
        w = widths[s]
        h = heights[s]
        x = min(SPAWN_X, width - w)
        y = top + SPAWN_GAP + h

        while True:
            nx = x + jets[j]
            j += 1
            if j == n_jets:
                j = 0
            if nx >= 0 and nx + w <= width and _fits(grid, rock, count, nx, y):
                x = nx
            # Bottom row of the rock is y - h + 1.
            if y - h >= 0 and _fits(grid, rock, count, x, y - 1):
                y -= 1
            else:
                break

        for i in range(count):
            cy = y - rock[i, 0]
            grid[cy, x + rock[i, 1]] = True
            if cy > top:
                top = cy
        out[k + 1] = top

    return out


def brute_force_heights(
    jets: Sequence[Jet],
    rocks: Sequence[RockShape],
    n_rocks: int,
    width: int = CHAMBER_WIDTH,
) -> np.ndarray:
    """Python wrapper for simulate_heights taking Jet and RockShape inputs."""
    if not jets:
        raise ValueError("cannot cycle over an empty sequence")
    for rock in rocks:
        if rock.width > width:
            raise ValueError(f"{rock!r} is wider than the chamber ({width})")
    cells, counts, widths, heights = pack_rocks(rocks)
    jet_array = np.array([int(jet) for jet in jets], dtype=np.int64)
    return simulate_heights(jet_array, cells, counts, widths, heights, width, n_rocks)


def brute_force_height(
    jets: Sequence[Jet],
    rocks: Sequence[RockShape],
    n_rocks: int,
    width: int = CHAMBER_WIDTH,
) -> int:
    """Tower height after n_rocks, simulated rock by rock."""
    return int(brute_force_heights(jets, rocks, n_rocks, width)[-1])


def warmup():
    """Call once to trigger Numba JIT compilation."""
    cells, counts, widths, heights = pack_rocks([RockShape("dot", frozenset({(0, 0)}))])
    simulate_heights(np.array([1], dtype=np.int64), cells, counts, widths, heights, CHAMBER_WIDTH, 1)
