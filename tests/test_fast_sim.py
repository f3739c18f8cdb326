"""Tests for the Numba brute-force simulator."""

import numpy as np
import pytest

from rockfall.analysis.fast_sim import (
    brute_force_height,
    brute_force_heights,
    pack_rocks,
    simulate_heights,
)
from rockfall.game.drop import DropSimulator
from rockfall.game.jets import Jet, parse_jets
from rockfall.game.rocks import ROCK_CATALOG, make_shape

EXAMPLE = ">>><<><>><<<>><>>><<<>>><<<><<<>><>><<>>"


class TestPackRocks:
    def test_shapes(self):
        cells, counts, widths, heights = pack_rocks(ROCK_CATALOG)
        assert cells.shape == (5, 5, 2)
        assert counts.tolist() == [4, 5, 5, 4, 4]
        assert widths.tolist() == [4, 3, 3, 1, 2]
        assert heights.tolist() == [1, 3, 3, 4, 2]

    def test_empty(self):
        with pytest.raises(ValueError):
            pack_rocks([])


class TestBruteForce:
    def test_example_2022(self):
        assert brute_force_height(parse_jets(EXAMPLE), ROCK_CATALOG, 2022) == 3068

    def test_first_heights(self):
        heights = brute_force_heights(parse_jets(EXAMPLE), ROCK_CATALOG, 3)
        assert heights.tolist() == [0, 1, 4, 6]

    def test_monotonic(self):
        heights = brute_force_heights(parse_jets(EXAMPLE), ROCK_CATALOG, 5000)
        assert (np.diff(heights) >= 0).all()

    def test_matches_python_simulator(self):
        jets = parse_jets(EXAMPLE)
        heights = brute_force_heights(jets, ROCK_CATALOG, 400)
        sim = DropSimulator(jets, ROCK_CATALOG)
        for n in range(1, 401):
            sim.drop()
            assert sim.chamber.tower_height() == heights[n]

    def test_zero_rocks(self):
        heights = brute_force_heights(parse_jets(EXAMPLE), ROCK_CATALOG, 0)
        assert heights.tolist() == [0]

    def test_full_width_rock(self):
        wide = make_shape("wide", [(0, c) for c in range(7)])
        assert brute_force_height([Jet.LEFT], [wide], 50) == 50

    def test_raw_arrays(self):
        cells, counts, widths, heights = pack_rocks(ROCK_CATALOG)
        jets = np.array([1, -1], dtype=np.int64)
        out = simulate_heights(jets, cells, counts, widths, heights, 7, 10)
        assert out.shape == (11,)
        assert out[0] == 0

    def test_invalid_inputs(self):
        with pytest.raises(ValueError):
            brute_force_heights([], ROCK_CATALOG, 10)
        wide = make_shape("wide", [(0, c) for c in range(8)])
        with pytest.raises(ValueError):
            brute_force_heights([Jet.LEFT], [wide], 10)
