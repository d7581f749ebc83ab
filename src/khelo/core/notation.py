"""Piece-placement text (the board field of FEN) <-> :class:`Board`."""

from __future__ import annotations

from khelo.core.board import Board
from khelo.core.piece import Piece

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


def board_from_placement(text: str) -> Board:
    """Parse a placement string such as ``STARTING_PLACEMENT``.

    Only the first FEN field is accepted; anything after a space is ignored
    so full FEN strings from other tools can be pasted in.
    """
    placement = text.strip().split(" ", 1)[0]
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Placement must have 8 ranks, got {len(ranks)}: {text!r}")

    rows: list[list[Piece | None]] = []
    # Text lists rank 8 first; row 0 is rank 1.
    for rank_text in reversed(ranks):
        row: list[Piece | None] = []
        for char in rank_text:
            if char.isdigit():
                row.extend([None] * int(char))
            else:
                row.append(Piece.from_char(char))
        if len(row) != 8:
            raise ValueError(f"Rank {rank_text!r} does not describe 8 squares")
        rows.append(row)
    return Board.from_rows(rows)


def board_to_placement(board: Board) -> str:
    """Serialise *board* to a placement string."""
    ranks: list[str] = []
    for row in reversed(board.rows()):
        parts: list[str] = []
        empty = 0
        for piece in row:
            if piece is None:
                empty += 1
                continue
            if empty:
                parts.append(str(empty))
                empty = 0
            parts.append(str(piece))
        if empty:
            parts.append(str(empty))
        ranks.append("".join(parts))
    return "/".join(ranks)
