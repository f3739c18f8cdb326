"""Tests for jet pattern parsing and cyclic cursors."""

import pytest

from rockfall.game.jets import (
    Cursor,
    Jet,
    JetParseError,
    load_jets,
    parse_jets,
)

EXAMPLE = ">>><<><>><<<>><>>><<<>>><<<><<<>><>><<>>"


class TestParseJets:
    def test_symbols(self):
        assert parse_jets("<>") == [Jet.LEFT, Jet.RIGHT]

    def test_trailing_newline_ignored(self):
        assert parse_jets(">>\n") == [Jet.RIGHT, Jet.RIGHT]

    def test_example_length(self):
        jets = parse_jets(EXAMPLE)
        assert len(jets) == 40
        assert jets[:4] == [Jet.RIGHT, Jet.RIGHT, Jet.RIGHT, Jet.LEFT]
        assert jets.count(Jet.LEFT) == EXAMPLE.count("<")

    def test_invalid_character(self):
        with pytest.raises(JetParseError) as excinfo:
            parse_jets("<x>")
        assert excinfo.value.position == 1
        assert excinfo.value.char == "x"

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_jets("<<v")

    def test_empty_pattern(self):
        with pytest.raises(ValueError):
            parse_jets("  \n")

    def test_jet_directions(self):
        assert int(Jet.LEFT) == -1
        assert int(Jet.RIGHT) == 1


class TestLoadJets:
    def test_load_file(self, tmp_path):
        path = tmp_path / "input.txt"
        path.write_text(EXAMPLE + "\n")
        assert load_jets(path) == parse_jets(EXAMPLE)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_jets(tmp_path / "missing.txt")


class TestCursor:
    def test_wraps_around(self):
        cursor = Cursor("abc")
        assert [cursor.next() for _ in range(5)] == ["a", "b", "c", "a", "b"]
        assert cursor.position == 2

    def test_single_item(self):
        cursor = Cursor([Jet.LEFT])
        assert cursor.next() is Jet.LEFT
        assert cursor.position == 0

    def test_empty_sequence_fails_fast(self):
        with pytest.raises(ValueError):
            Cursor([])
