"""Legal destinations: pseudo-legal moves that keep the mover's king safe."""

from __future__ import annotations

from dataclasses import dataclass

from khelo.core.board import Board
from khelo.core.enums import CastlingRights, Color, PieceType
from khelo.core.move_applier import (
    HOME_ROW,
    KING_HOME_COL,
    apply_castling,
    apply_move,
)
from khelo.core.move_generator import MoveGenerator
from khelo.core.types import POSITIONS, Position

LegalMove = tuple[Position, Position]


@dataclass(frozen=True, slots=True)
class _CastlingLane:
    """Files involved in one castling option."""

    right: CastlingRights
    rook_col: int
    between: tuple[int, ...]
    # King's start, the square it crosses, its destination.
    king_path: tuple[int, ...]


_LANES: dict[Color, tuple[_CastlingLane, ...]] = {
    Color.WHITE: (
        _CastlingLane(CastlingRights.WHITE_KINGSIDE, 7, (5, 6), (4, 5, 6)),
        _CastlingLane(CastlingRights.WHITE_QUEENSIDE, 0, (1, 2, 3), (4, 3, 2)),
    ),
    Color.BLACK: (
        _CastlingLane(CastlingRights.BLACK_KINGSIDE, 7, (5, 6), (4, 5, 6)),
        _CastlingLane(CastlingRights.BLACK_QUEENSIDE, 0, (1, 2, 3), (4, 3, 2)),
    ),
}


def _leaves_king_safe(board: Board, mover: Color) -> bool:
    return not MoveGenerator(board).king_under_attack(mover)


def _castling_destinations(
    board: Board,
    from_pos: Position,
    mover: Color,
    castling: CastlingRights,
) -> set[Position]:
    row = HOME_ROW[mover]
    if from_pos != POSITIONS[row][KING_HOME_COL]:
        return set()

    gen = MoveGenerator(board)
    opponent = mover.opposite
    found: set[Position] = set()
    for lane in _LANES[mover]:
        if not castling & lane.right:
            continue
        rook = board.at(row, lane.rook_col)
        if rook is None or not rook.is_a(mover, PieceType.ROOK):
            continue
        if any(board.at(row, col) is not None for col in lane.between):
            continue
        if any(gen.is_square_attacked(POSITIONS[row][col], opponent) for col in lane.king_path):
            continue
        to_pos = POSITIONS[row][lane.king_path[-1]]
        if _leaves_king_safe(apply_castling(board, from_pos, to_pos), mover):
            found.add(to_pos)
    return found


def legal_destinations(
    board: Board,
    from_pos: Position,
    mover: Color,
    castling: CastlingRights = CastlingRights.ALL,
    en_passant: Position | None = None,
) -> set[Position]:
    """Destinations the piece on *from_pos* may legally move to.

    Returns an empty set when the square is empty or holds the wrong color.
    Castling shows up as a two-square king move.
    """
    piece = board[from_pos]
    if piece is None or piece.color != mover:
        return set()

    legal = {
        to_pos
        for to_pos in MoveGenerator(board, en_passant).pseudo_legal_destinations(from_pos)
        if _leaves_king_safe(apply_move(board, from_pos, to_pos, mover, en_passant), mover)
    }
    if piece.piece_type == PieceType.KING and castling:
        legal |= _castling_destinations(board, from_pos, mover, castling)
    return legal


def any_legal_moves(
    board: Board,
    mover: Color,
    castling: CastlingRights = CastlingRights.ALL,
    en_passant: Position | None = None,
) -> bool:
    """Does *mover* have at least one legal move? Stops at the first hit."""
    for from_pos, _piece in board.pieces(mover):
        if legal_destinations(board, from_pos, mover, castling, en_passant):
            return True
    return False


def all_legal_moves(
    board: Board,
    mover: Color,
    castling: CastlingRights = CastlingRights.ALL,
    en_passant: Position | None = None,
) -> list[LegalMove]:
    """Every legal (from, to) pair for *mover*, in board order."""
    moves: list[LegalMove] = []
    for from_pos, _piece in board.pieces(mover):
        for to_pos in sorted(legal_destinations(board, from_pos, mover, castling, en_passant)):
            moves.append((from_pos, to_pos))
    return moves
