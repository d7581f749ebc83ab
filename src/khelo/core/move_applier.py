"""Move application - produces a new :class:`Board` for every move.

The applier only touches piece placement. Castling rights, the en-passant
target and the side to move are the caller's bookkeeping; the helpers at the
bottom of this module compute them, and :func:`make_move` bundles the lot
into one transition for the game layer.
"""

from __future__ import annotations

from dataclasses import dataclass

from khelo.core.board import Board
from khelo.core.enums import CastlingRights, Color, PieceType
from khelo.core.piece import Piece
from khelo.core.types import POSITIONS, Position

# Row a pawn of each color promotes on.
PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}
HOME_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}
KING_HOME_COL = 4

# Rook home square -> the right that dies when anything leaves it.
ROOK_HOMES: dict[Position, CastlingRights] = {
    POSITIONS[0][0]: CastlingRights.WHITE_QUEENSIDE,
    POSITIONS[0][7]: CastlingRights.WHITE_KINGSIDE,
    POSITIONS[7][0]: CastlingRights.BLACK_QUEENSIDE,
    POSITIONS[7][7]: CastlingRights.BLACK_KINGSIDE,
}

_KING_RIGHTS: dict[Color, CastlingRights] = {
    Color.WHITE: CastlingRights.WHITE_BOTH,
    Color.BLACK: CastlingRights.BLACK_BOTH,
}


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Everything that changes when one half-move is played."""

    board: Board
    castling: CastlingRights
    en_passant: Position | None
    moved: Piece
    captured: Piece | None = None
    promoted: bool = False
    castled: bool = False


def is_castling_move(board: Board, from_pos: Position, to_pos: Position) -> bool:
    """A king moving two files along its row."""
    piece = board[from_pos]
    return (
        piece is not None
        and piece.piece_type == PieceType.KING
        and from_pos.row == to_pos.row
        and abs(to_pos.col - from_pos.col) == 2
    )


def apply_move(
    board: Board,
    from_pos: Position,
    to_pos: Position,
    mover: Color,
    en_passant: Position | None = None,
) -> Board:
    """Move the piece on *from_pos* to *to_pos* (no castling rook handling).

    Removes the pawn taken en passant and promotes a pawn reaching the last
    row to a queen.
    """
    piece = board[from_pos]
    if piece is None:
        raise ValueError(f"No piece on {from_pos}")

    changes: dict[Position, Piece | None] = {from_pos: None, to_pos: piece}
    if piece.piece_type == PieceType.PAWN:
        if to_pos == en_passant and board[to_pos] is None:
            # The captured pawn sits beside the mover, behind the target square.
            changes[POSITIONS[from_pos.row][to_pos.col]] = None
        if to_pos.row == PROMOTION_ROW[mover]:
            changes[to_pos] = Piece.of(piece.color, PieceType.QUEEN)
    return board.replace(changes)


def apply_castling(board: Board, from_pos: Position, to_pos: Position) -> Board:
    """King two squares towards a rook, that rook to the square it crossed."""
    king = board[from_pos]
    if king is None:
        raise ValueError(f"No piece on {from_pos}")

    row = from_pos.row
    if to_pos.col > from_pos.col:
        rook_from, rook_to = POSITIONS[row][7], POSITIONS[row][to_pos.col - 1]
    else:
        rook_from, rook_to = POSITIONS[row][0], POSITIONS[row][to_pos.col + 1]
    rook = board[rook_from]

    return board.replace(
        {
            from_pos: None,
            rook_from: None,
            to_pos: king,
            rook_to: rook,
        }
    )


def play_move(
    board: Board,
    from_pos: Position,
    to_pos: Position,
    mover: Color,
    en_passant: Position | None = None,
) -> Board:
    """Apply a move, routing two-file king moves through :func:`apply_castling`."""
    if is_castling_move(board, from_pos, to_pos):
        return apply_castling(board, from_pos, to_pos)
    return apply_move(board, from_pos, to_pos, mover, en_passant)


# -- Caller-side bookkeeping ------------------------------------------------


def update_castling_rights(
    rights: CastlingRights,
    piece: Piece,
    from_pos: Position,
) -> CastlingRights:
    """Clear the rights tied to the moving piece and the square it left.

    Any move starting on a rook home square clears that corner's right,
    whatever piece made it. Captures on a home square leave rights alone;
    castling itself checks that the rook is still there.
    """
    if piece.piece_type == PieceType.KING:
        rights &= ~_KING_RIGHTS[piece.color]
    corner = ROOK_HOMES.get(from_pos)
    if corner is not None:
        rights &= ~corner
    return rights


def next_en_passant(
    piece: Piece,
    from_pos: Position,
    to_pos: Position,
) -> Position | None:
    """Square passed over by a two-square pawn advance, else ``None``."""
    if piece.piece_type != PieceType.PAWN or abs(to_pos.row - from_pos.row) != 2:
        return None
    return POSITIONS[(from_pos.row + to_pos.row) // 2][from_pos.col]


def make_move(
    board: Board,
    from_pos: Position,
    to_pos: Position,
    castling: CastlingRights = CastlingRights.ALL,
    en_passant: Position | None = None,
) -> MoveOutcome:
    """Play one half-move and recompute castling rights and en passant.

    Legality is not checked here.
    """
    piece = board[from_pos]
    if piece is None:
        raise ValueError(f"No piece on {from_pos}")

    castled = is_castling_move(board, from_pos, to_pos)
    captured = board[to_pos]
    if castled:
        new_board = apply_castling(board, from_pos, to_pos)
    else:
        if (
            piece.piece_type == PieceType.PAWN
            and to_pos == en_passant
            and captured is None
        ):
            captured = board[POSITIONS[from_pos.row][to_pos.col]]
        new_board = apply_move(board, from_pos, to_pos, piece.color, en_passant)

    return MoveOutcome(
        board=new_board,
        castling=update_castling_rights(castling, piece, from_pos),
        en_passant=next_en_passant(piece, from_pos, to_pos),
        moved=piece,
        captured=captured,
        promoted=new_board[to_pos] != piece and not castled,
        castled=castled,
    )
