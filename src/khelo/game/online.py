"""Online multiplayer data contract.

The shared game store is polled by the host; each snapshot it returns is
decoded here and handed to :meth:`GameController.sync_remote`. No network
access happens in this package.

Snapshot payload (as stored remotely)::

    {
        "board": [[{"pieceType": "pawn", "color": "white",
                    "position": {"x": 0, "y": 1}} | None, ...8], ...8],
        "currentTurn": "white" | "black",
        "enPassantTarget": {"x": col, "y": row},   # optional
        "winner": "white" | "black",               # optional
    }

``board[row][col]`` follows the local orientation (row 0 = White's back rank);
``x`` is the column and ``y`` the row.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from khelo.core.board import Board
from khelo.core.enums import Color, PieceType
from khelo.core.piece import Piece
from khelo.core.types import Position

POLL_INTERVAL_MS = 1500

_COLORS: dict[str, Color] = {"white": Color.WHITE, "black": Color.BLACK}
_PIECE_TYPES: dict[str, PieceType] = {pt.name.lower(): pt for pt in PieceType}


def _parse_color(value: object) -> Color:
    try:
        return _COLORS[str(value)]
    except KeyError:
        raise ValueError(f"Invalid color in snapshot: {value!r}") from None


def _parse_position(value: Mapping[str, Any]) -> Position:
    try:
        return Position(int(value["y"]), int(value["x"]))
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Invalid position in snapshot: {value!r}") from exc


def _decode_cell(cell: Mapping[str, Any] | None) -> Piece | None:
    if cell is None:
        return None
    try:
        piece_type = _PIECE_TYPES[str(cell["pieceType"])]
    except KeyError:
        raise ValueError(f"Invalid piece in snapshot: {cell!r}") from None
    return Piece.of(_parse_color(cell.get("color")), piece_type)


def board_from_remote(cells: Sequence[Sequence[Mapping[str, Any] | None]]) -> Board:
    """Convert the remote ``board`` grid into a :class:`Board`."""
    return Board.from_rows([[_decode_cell(cell) for cell in row] for row in cells])


def board_to_remote(board: Board) -> list[list[dict[str, Any] | None]]:
    """Inverse of :func:`board_from_remote`, for pushing a local board."""
    grid: list[list[dict[str, Any] | None]] = []
    for row_idx, row in enumerate(board.rows()):
        grid.append(
            [
                None
                if piece is None
                else {
                    "pieceType": piece.piece_type.name.lower(),
                    "color": str(piece.color),
                    "position": {"x": col_idx, "y": row_idx},
                }
                for col_idx, piece in enumerate(row)
            ]
        )
    return grid


@dataclass(frozen=True, slots=True)
class RemoteSnapshot:
    """One polled state of an online game."""

    board: Board
    side_to_move: Color
    en_passant: Position | None = None
    winner: Color | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> RemoteSnapshot:
        try:
            cells = payload["board"]
            turn = payload["currentTurn"]
        except KeyError as exc:
            raise ValueError(f"Snapshot is missing {exc.args[0]!r}") from None

        ep = payload.get("enPassantTarget")
        winner = payload.get("winner")
        return cls(
            board=board_from_remote(cells),
            side_to_move=_parse_color(turn),
            en_passant=_parse_position(ep) if ep is not None else None,
            winner=_parse_color(winner) if winner is not None else None,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "board": board_to_remote(self.board),
            "currentTurn": str(self.side_to_move),
        }
        if self.en_passant is not None:
            payload["enPassantTarget"] = {"x": self.en_passant.col, "y": self.en_passant.row}
        if self.winner is not None:
            payload["winner"] = str(self.winner)
        return payload
