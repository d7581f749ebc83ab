"""Core domain layer - pure chess rules with zero external dependencies.

Quick start::

    from khelo.core import Board, Color, legal_destinations, parse_square

    board = Board.initial()
    for to_pos in legal_destinations(board, parse_square("g1"), Color.WHITE):
        print(to_pos)
"""

from khelo.core.board import Board
from khelo.core.enums import (
    CastlingRights,
    Color,
    DrawReason,
    GameResult,
    GameStatus,
    PieceType,
)
from khelo.core.history import PositionHistory, position_key
from khelo.core.legality import (
    LegalMove,
    all_legal_moves,
    any_legal_moves,
    legal_destinations,
)
from khelo.core.move_applier import (
    MoveOutcome,
    apply_castling,
    apply_move,
    is_castling_move,
    make_move,
    next_en_passant,
    play_move,
    update_castling_rights,
)
from khelo.core.move_generator import (
    MoveGenerator,
    is_square_attacked,
    king_under_attack,
    pseudo_legal_destinations,
)
from khelo.core.notation import (
    STARTING_PLACEMENT,
    board_from_placement,
    board_to_placement,
)
from khelo.core.piece import Piece
from khelo.core.rules import Rules, StatusReport
from khelo.core.types import ALL_POSITIONS, Position, parse_square, square_name

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "DrawReason",
    "GameResult",
    "GameStatus",
    "PieceType",
    # Types / helpers
    "ALL_POSITIONS",
    "Position",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "MoveGenerator",
    "MoveOutcome",
    "Piece",
    "PositionHistory",
    "Rules",
    "StatusReport",
    # Rule functions
    "LegalMove",
    "all_legal_moves",
    "any_legal_moves",
    "apply_castling",
    "apply_move",
    "is_castling_move",
    "is_square_attacked",
    "king_under_attack",
    "legal_destinations",
    "make_move",
    "next_en_passant",
    "play_move",
    "position_key",
    "pseudo_legal_destinations",
    "update_castling_rights",
    # Notation
    "STARTING_PLACEMENT",
    "board_from_placement",
    "board_to_placement",
]
