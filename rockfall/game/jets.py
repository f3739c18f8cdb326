"""Jet pattern parsing and cyclic cursors.

The jet pattern is a single line of '<' (push left) and '>' (push right).
It repeats forever, as does the rock sequence; a Cursor walks either one
with an explicit index so the simulation phase stays observable.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from pathlib import Path
from typing import Generic, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Jet(IntEnum):
    LEFT = -1
    RIGHT = 1


JET_SYMBOLS = {"<": Jet.LEFT, ">": Jet.RIGHT}


class JetParseError(ValueError):
    """Raised when a jet pattern contains anything besides '<' and '>'."""

    def __init__(self, position: int, char: str):
        self.position = position
        self.char = char
        super().__init__(f"invalid jet {char!r} at position {position}")


def parse_jets(text: str) -> list[Jet]:
    """Parse a jet pattern, ignoring surrounding whitespace."""
    pattern = text.strip()
    if not pattern:
        raise ValueError("jet pattern is empty")
    jets = []
    for i, ch in enumerate(pattern):
        try:
            jets.append(JET_SYMBOLS[ch])
        except KeyError:
            raise JetParseError(i, ch) from None
    return jets


def load_jets(path: str | Path) -> list[Jet]:
    """Read and parse a jet pattern file."""
    path = Path(path)
    jets = parse_jets(path.read_text())
    logger.debug("Loaded %d jets from %s", len(jets), path)
    return jets


class Cursor(Generic[T]):
    """Endless walk over a fixed, non-empty sequence.

    Usage:
        rocks = Cursor(ROCK_CATALOG)
        shape = rocks.next()
        rocks.position  # index of the item next() will return
    """

    def __init__(self, items: Sequence[T]):
        self.items = tuple(items)
        if not self.items:
            raise ValueError("cannot cycle over an empty sequence")
        self.position = 0

    def next(self) -> T:
        item = self.items[self.position]
        self.position = (self.position + 1) % len(self.items)
        return item
