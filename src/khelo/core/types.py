"""Board coordinates and naming helpers.

Board layout (row = rank index, col = file index):
    row 0 holds White's back rank (a1..h1), row 1 White's pawns,
    row 6 Black's pawns, row 7 Black's back rank (a8..h8).
    col 0 is the a-file, col 7 the h-file.
"""

from __future__ import annotations

from dataclasses import dataclass

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A (row, col) board coordinate, each 0-7 inclusive."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not (0 <= self.row < 8 and 0 <= self.col < 8):
            raise ValueError(f"Position out of range: ({self.row}, {self.col})")

    def __str__(self) -> str:
        return square_name(self)

    def offset(self, d_row: int, d_col: int) -> Position | None:
        """Neighbouring coordinate, or ``None`` when it falls off the board."""
        row = self.row + d_row
        col = self.col + d_col
        if 0 <= row < 8 and 0 <= col < 8:
            return POSITIONS[row][col]
        return None

    @property
    def index(self) -> int:
        """Flat 0-63 index (a1=0, h1=7, a8=56)."""
        return self.row * 8 + self.col


def square_name(pos: Position) -> str:
    """Human-readable name, e.g. Position(1, 4) -> 'e2'."""
    return _FILES[pos.col] + _RANKS[pos.row]


def parse_square(name: str) -> Position:
    """Parse square name, e.g. 'e4' -> Position(3, 4)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return POSITIONS[_RANKS.index(name[1])][_FILES.index(name[0])]


# Shared instances; every coordinate the rules produce comes from here.
POSITIONS: tuple[tuple[Position, ...], ...] = tuple(
    tuple(Position(row, col) for col in range(8)) for row in range(8)
)
ALL_POSITIONS: tuple[Position, ...] = tuple(
    pos for rank in POSITIONS for pos in rank
)
