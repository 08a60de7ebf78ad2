"""Board coordinates.

Layout (row-major, rank 8 on top)::

    row 0: a8 b8 ... h8
    row 7: a1 b1 ... h1
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

BOARD_SIZE = 8
FILES = "abcdefgh"
RANKS = "12345678"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A (row, col) address; may be off-board until checked with :attr:`is_valid`."""

    row: int
    col: int

    @property
    def is_valid(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE

    def offset(self, drow: int, dcol: int) -> Coordinate:
        return Coordinate(self.row + drow, self.col + dcol)

    @property
    def name(self) -> str:
        """Square name, e.g. ``Coordinate(4, 4)`` -> ``'e4'``; ``''`` when off-board."""
        if not self.is_valid:
            return ""
        return FILES[self.col] + str(BOARD_SIZE - self.row)

    def __str__(self) -> str:
        return self.name


def parse_coordinate(text: str | None) -> Coordinate | None:
    """Parse ``'e4'``-style text; ``None`` when it is not a square name."""
    if text is None or len(text) != 2:
        return None
    file_char, rank_char = text[0], text[1]
    if file_char not in FILES or rank_char not in RANKS:
        return None
    return Coordinate(BOARD_SIZE - int(rank_char), FILES.index(file_char))


def all_coordinates() -> Iterator[Coordinate]:
    """All 64 squares, rank 8 first."""
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            yield Coordinate(row, col)
