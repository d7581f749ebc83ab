"""Game state - one game's board, bookkeeping and position history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from khelo.core.board import Board
from khelo.core.enums import CastlingRights, Color, DrawReason, GameResult, GameStatus, PieceType
from khelo.core.history import PositionHistory
from khelo.core.legality import legal_destinations
from khelo.core.move_applier import HOME_ROW, KING_HOME_COL, ROOK_HOMES, make_move
from khelo.core.piece import Piece
from khelo.core.rules import Rules, StatusReport
from khelo.core.types import POSITIONS, Position, square_name
from khelo.game.interfaces import GamePhase

_LOGGER = logging.getLogger(__name__)

_PLAYING = StatusReport(GameStatus.PLAYING)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    from_pos: Position
    to_pos: Position
    piece: Piece
    report: StatusReport
    captured: Piece | None = None
    promoted: bool = False
    castled: bool = False

    @property
    def uci(self) -> str:
        base = f"{square_name(self.from_pos)}{square_name(self.to_pos)}"
        return base + "q" if self.promoted else base

    @property
    def was_check(self) -> bool:
        return self.report.status in (GameStatus.CHECK, GameStatus.CHECKMATE)


@dataclass
class GameState:
    """Everything one game session owns.

    Each applied move produces a new board, recomputes castling rights and
    the en-passant target, records the resulting position and resolves the
    status for the side now to move. The position history lives here and is
    replaced on :meth:`setup`; it is never shared between games.
    """

    detect_insufficient_material: bool = False
    board: Board = field(default_factory=Board.initial, init=False)
    side_to_move: Color = field(default=Color.WHITE, init=False)
    castling: CastlingRights = field(default=CastlingRights.ALL, init=False)
    en_passant: Position | None = field(default=None, init=False)
    history: PositionHistory = field(default_factory=PositionHistory, init=False)
    report: StatusReport = field(default=_PLAYING, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)

    # -- Initialisation --------------------------------------------------------

    def setup(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Position | None = None,
    ) -> None:
        """Initialise (or reset) the game with an empty position history.

        Only positions reached by a move or a remote snapshot are counted, so
        the start position is not part of the repetition count.
        """
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.history = PositionHistory()
        self.move_history.clear()
        self.phase = GamePhase.AWAITING_MOVE
        self._conclude(record=False)

    # -- Move application ----------------------------------------------------

    def legal_destinations(self, from_pos: Position) -> set[Position]:
        if self.is_game_over:
            return set()
        return legal_destinations(
            self.board, from_pos, self.side_to_move, self.castling, self.en_passant
        )

    def is_legal(self, from_pos: Position, to_pos: Position) -> bool:
        return to_pos in self.legal_destinations(from_pos)

    def apply_move(self, from_pos: Position, to_pos: Position) -> MoveRecord:
        """Apply a validated move and return the history record.

        Caller is responsible for the legality check.
        """
        if self.is_game_over:
            raise ValueError("Game is already over")

        outcome = make_move(self.board, from_pos, to_pos, self.castling, self.en_passant)
        self.board = outcome.board
        self.castling = outcome.castling
        self.en_passant = outcome.en_passant
        self.side_to_move = self.side_to_move.opposite
        self._conclude()

        record = MoveRecord(
            from_pos=from_pos,
            to_pos=to_pos,
            piece=outcome.moved,
            report=self.report,
            captured=outcome.captured,
            promoted=outcome.promoted,
            castled=outcome.castled,
        )
        self.move_history.append(record)
        return record

    def sync_snapshot(
        self,
        board: Board,
        side_to_move: Color,
        en_passant: Position | None = None,
    ) -> bool:
        """Adopt a remote board exactly as if it had been produced locally.

        A snapshot identical to the current one is ignored so repeated polls
        do not inflate the repetition count. Returns whether anything changed.
        """
        if (
            board == self.board
            and side_to_move == self.side_to_move
            and en_passant == self.en_passant
        ):
            return False
        if self.is_game_over:
            _LOGGER.warning("Ignoring remote snapshot after the game ended")
            return False

        self.board = board
        self.side_to_move = side_to_move
        self.en_passant = en_passant
        self.castling = _prune_castling(self.castling, board)
        self._conclude()
        _LOGGER.debug("Synced remote snapshot, %s to move: %s", side_to_move, self.report.status)
        return True

    # -- Query helpers ---------------------------------------------------------

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def result(self) -> GameResult:
        return self.report.result

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def last_move(self) -> tuple[Position, Position] | None:
        if not self.move_history:
            return None
        last = self.move_history[-1]
        return last.from_pos, last.to_pos

    # -- Internal --------------------------------------------------------------

    def _conclude(self, record: bool = True) -> None:
        """Record the current position (unless *record* is false) and classify it."""
        if record:
            self.history.record(self.board, self.side_to_move)
        draw = (
            DrawReason.THREEFOLD_REPETITION
            if self.history.is_threefold(self.board, self.side_to_move)
            else None
        )
        self.report = Rules.resolve(
            self.board,
            self.side_to_move,
            draw,
            en_passant=self.en_passant,
            detect_insufficient_material=self.detect_insufficient_material,
        )
        if self.report.is_terminal:
            self.phase = GamePhase.GAME_OVER


def _prune_castling(rights: CastlingRights, board: Board) -> CastlingRights:
    """Drop rights whose king or rook is no longer on its home square."""
    for color in (Color.WHITE, Color.BLACK):
        king = board[POSITIONS[HOME_ROW[color]][KING_HOME_COL]]
        if king is None or not king.is_a(color, PieceType.KING):
            rights &= ~(
                CastlingRights.WHITE_BOTH if color == Color.WHITE else CastlingRights.BLACK_BOTH
            )
    for home, right in ROOK_HOMES.items():
        rook = board[home]
        color = Color.WHITE if home.row == 0 else Color.BLACK
        if rook is None or not rook.is_a(color, PieceType.ROOK):
            rights &= ~right
    return rights
