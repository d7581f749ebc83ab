"""High-level chess rules: check, checkmate, stalemate, draw detection."""

from __future__ import annotations

from dataclasses import dataclass

from khelo.core.board import Board
from khelo.core.enums import (
    CastlingRights,
    Color,
    DrawReason,
    GameResult,
    GameStatus,
    PieceType,
)
from khelo.core.legality import any_legal_moves
from khelo.core.move_generator import MoveGenerator
from khelo.core.types import Position

_MINOR_PIECES = (PieceType.KNIGHT, PieceType.BISHOP)


@dataclass(frozen=True, slots=True)
class StatusReport:
    """Result of classifying a position for the side to move."""

    status: GameStatus
    winner: Color | None = None
    draw_reason: DrawReason | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def is_check(self) -> bool:
        return self.status == GameStatus.CHECK

    @property
    def result(self) -> GameResult:
        if self.status == GameStatus.CHECKMATE and self.winner is not None:
            return GameResult.win_for(self.winner)
        if self.status in (GameStatus.STALEMATE, GameStatus.DRAW):
            return GameResult.DRAW
        return GameResult.IN_PROGRESS


class Rules:
    """Static rule-checker over a board and the side to move."""

    # Product policy:
    # - Threefold repetition is detected by the position history and passed
    #   in as a draw reason; it overrides any board analysis.
    # - Insufficient material is opt-in and covers the basic cases only.

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).king_under_attack(color)

    @staticmethod
    def is_checkmate(
        board: Board,
        color: Color,
        en_passant: Position | None = None,
    ) -> bool:
        if not Rules.is_in_check(board, color):
            return False
        return not any_legal_moves(board, color, CastlingRights.NONE, en_passant)

    @staticmethod
    def is_stalemate(
        board: Board,
        color: Color,
        en_passant: Position | None = None,
    ) -> bool:
        if Rules.is_in_check(board, color):
            return False
        return not any_legal_moves(board, color, CastlingRights.NONE, en_passant)

    @staticmethod
    def is_insufficient_material(board: Board) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-color bishops)."""
        others = [
            (pos, piece)
            for pos, piece in board.pieces()
            if piece.piece_type != PieceType.KING
        ]

        if not others:
            return True

        if len(others) == 1:
            return others[0][1].piece_type in _MINOR_PIECES

        if len(others) == 2:
            (a_pos, a), (b_pos, b) = others
            if (
                a.piece_type == PieceType.BISHOP
                and b.piece_type == PieceType.BISHOP
                and a.color != b.color
            ):
                return (a_pos.row + a_pos.col) % 2 == (b_pos.row + b_pos.col) % 2

        return False

    @staticmethod
    def resolve(
        board: Board,
        side_to_move: Color,
        draw_reason: DrawReason | None = None,
        *,
        en_passant: Position | None = None,
        detect_insufficient_material: bool = False,
    ) -> StatusReport:
        """Classify the position after a half-move.

        Castling never decides whether a legal move exists (the king can
        always step to the square it would cross), so only the en-passant
        target is taken into account.
        """
        if draw_reason is not None:
            return StatusReport(GameStatus.DRAW, draw_reason=draw_reason)

        has_moves = any_legal_moves(board, side_to_move, CastlingRights.NONE, en_passant)
        in_check = Rules.is_in_check(board, side_to_move)

        if not has_moves:
            if in_check:
                return StatusReport(GameStatus.CHECKMATE, winner=side_to_move.opposite)
            return StatusReport(GameStatus.STALEMATE, draw_reason=DrawReason.STALEMATE)

        if detect_insufficient_material and Rules.is_insufficient_material(board):
            return StatusReport(
                GameStatus.DRAW, draw_reason=DrawReason.INSUFFICIENT_MATERIAL
            )

        if in_check:
            return StatusReport(GameStatus.CHECK)
        return StatusReport(GameStatus.PLAYING)
