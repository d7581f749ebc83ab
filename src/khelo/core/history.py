"""Position history for threefold-repetition detection.

The repetition key covers the 64 squares and the side to move only.
Castling rights and the en-passant target are left out on purpose, so two
positions that differ only in those count as the same position.
"""

from __future__ import annotations

from collections import Counter

from khelo.core.board import Board
from khelo.core.enums import Color

REPETITION_LIMIT = 3


def position_key(board: Board, side_to_move: Color) -> str:
    """Deterministic key: side, then the rows joined by ``|`` (``.`` = empty)."""
    rows = ("".join(str(p) if p else "." for p in row) for row in board.rows())
    return f"{side_to_move}:{'|'.join(rows)}"


class PositionHistory:
    """Occurrence counts of (board, side to move) within one game.

    Owned by a single game session and reset for every new game. The AI
    search never reads or writes it.
    """

    __slots__ = ("_counts",)

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()

    def record(self, board: Board, side_to_move: Color) -> PositionHistory:
        """Count one more occurrence of the position; returns ``self``."""
        self._counts[position_key(board, side_to_move)] += 1
        return self

    def count(self, board: Board, side_to_move: Color) -> int:
        return self._counts[position_key(board, side_to_move)]

    def is_threefold(self, board: Board, side_to_move: Color) -> bool:
        return self.count(board, side_to_move) >= REPETITION_LIMIT

    def has_threefold(self) -> bool:
        """Whether any recorded position reached the repetition limit."""
        return any(n >= REPETITION_LIMIT for n in self._counts.values())

    def reset(self) -> None:
        self._counts.clear()

    def copy(self) -> PositionHistory:
        clone = PositionHistory()
        clone._counts = self._counts.copy()
        return clone

    def __len__(self) -> int:
        """Number of distinct positions recorded."""
        return len(self._counts)
