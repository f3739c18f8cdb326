"""Tests for coordinates and the rock catalog."""

import pytest

from rockfall.game.geometry import DOWN, LEFT, RIGHT, Coord
from rockfall.game.rocks import (
    ROCK_CATALOG,
    ROCK_SHAPES,
    RockShape,
    RockType,
    make_shape,
)


class TestCoord:
    def test_add(self):
        assert Coord(1, 2) + Coord(3, 4) == Coord(4, 6)

    def test_sub(self):
        assert Coord(5, 3) - Coord(2, 1) == Coord(3, 2)

    def test_directions(self):
        anchor = Coord(3, 3)
        assert anchor + LEFT == Coord(2, 3)
        assert anchor + RIGHT == Coord(4, 3)
        assert anchor + DOWN == Coord(3, 2)

    def test_lexicographic_order(self):
        coords = [Coord(1, 0), Coord(0, 5), Coord(0, 1)]
        assert sorted(coords) == [Coord(0, 1), Coord(0, 5), Coord(1, 0)]

    def test_hashable(self):
        assert {Coord(1, 1), Coord(1, 1)} == {Coord(1, 1)}


class TestRockCatalog:
    def test_five_rocks_in_fall_order(self):
        assert len(ROCK_CATALOG) == 5
        assert [rock.name for rock in ROCK_CATALOG] == [
            "HBAR", "PLUS", "ANGLE", "VBAR", "SQUARE",
        ]

    def test_all_shapes_defined(self):
        for rock in RockType:
            assert rock in ROCK_SHAPES
            assert ROCK_CATALOG[rock].offsets == frozenset(ROCK_SHAPES[rock])

    def test_cell_counts(self):
        assert [len(rock.offsets) for rock in ROCK_CATALOG] == [4, 5, 5, 4, 4]

    def test_dimensions(self):
        dims = [(rock.width, rock.height) for rock in ROCK_CATALOG]
        assert dims == [(4, 1), (3, 3), (3, 3), (1, 4), (2, 2)]

    def test_angle_is_mirrored_l(self):
        # ..# / ..# / ###
        angle = make_shape("ANGLE", [(0, 2), (1, 2), (2, 0), (2, 1), (2, 2)])
        assert angle == ROCK_CATALOG[RockType.ANGLE]

    def test_plus_is_symmetric(self):
        plus = ROCK_CATALOG[RockType.PLUS]
        assert plus.offsets == frozenset((r, 2 - c) for r, c in plus.offsets)
        assert plus.offsets == frozenset((2 - r, c) for r, c in plus.offsets)


class TestRockShape:
    def test_cells_at_hangs_down_from_anchor(self):
        angle = ROCK_CATALOG[RockType.ANGLE]
        cells = angle.cells_at(Coord(2, 5))
        assert sorted(cells) == [
            Coord(2, 3), Coord(3, 3), Coord(4, 3), Coord(4, 4), Coord(4, 5),
        ]

    def test_vbar_cells(self):
        vbar = ROCK_CATALOG[RockType.VBAR]
        assert sorted(vbar.cells_at(Coord(0, 4))) == [
            Coord(0, 1), Coord(0, 2), Coord(0, 3), Coord(0, 4),
        ]

    def test_empty_shape_rejected(self):
        with pytest.raises(ValueError):
            RockShape("nothing", frozenset())

    def test_negative_offsets_rejected(self):
        with pytest.raises(ValueError):
            make_shape("bad", [(0, -1)])

    def test_shapes_are_immutable(self):
        with pytest.raises(AttributeError):
            ROCK_CATALOG[0].width = 7

    def test_custom_wide_shape(self):
        wide = make_shape("wide", [(0, c) for c in range(7)])
        assert wide.width == 7
        assert wide.height == 1
