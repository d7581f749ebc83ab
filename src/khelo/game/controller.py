"""GameController - the central orchestrator of a chess game.

Coordinates: Players, GameState, engines.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from khelo.core.board import Board
from khelo.core.enums import Color
from khelo.core.rules import StatusReport
from khelo.core.types import Position
from khelo.engine.search import IEngine
from khelo.game.interfaces import GameMode, GamePhase, IGameController, IPlayer
from khelo.game.player import AUTO_PLAY_DELAY_MS, AIPlayer, HumanPlayer
from khelo.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# -- Event definitions --------------------------------------------------------

MoveCallback = Callable[[MoveRecord, GameState], None]
GameOverCallback = Callable[[StatusReport], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# -- Controller ---------------------------------------------------------------


class GameController(IGameController):
    """Orchestrates a full chess game: validates moves, switches turns,
    notifies listeners.

    The controller is mode-agnostic; which side the computer plays is decided
    by the players handed to :meth:`new_game`. Methods are meant to be called
    from a single thread; engine results computed elsewhere come back through
    :meth:`submit_move`.
    """

    __slots__ = ("_state", "_players", "_detect_insufficient_material", "events")

    def __init__(self, *, detect_insufficient_material: bool = False) -> None:
        self._detect_insufficient_material = detect_insufficient_material
        self._state = GameState(detect_insufficient_material=detect_insufficient_material)
        self._players: dict[Color, IPlayer] = {}
        self.events = GameEvents()

    # -- Properties -----------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # -- IGameController impl -------------------------------------------------

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        self._players = {Color.WHITE: white, Color.BLACK: black}

        self._state = GameState(detect_insufficient_material=self._detect_insufficient_material)
        self._state.setup(board, side_to_move)

        if self._state.is_game_over:
            self._emit_game_over(self._state.report)
            return
        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()

    def legal_destinations(self, from_pos: Position) -> set[Position]:
        return self._state.legal_destinations(from_pos)

    def submit_move(self, from_pos: Position, to_pos: Position) -> bool:
        if self._state.is_game_over:
            return False
        if self._state.phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False
        if not self._state.is_legal(from_pos, to_pos):
            _LOGGER.debug("Rejected illegal move %s%s", from_pos, to_pos)
            return False

        record = self._state.apply_move(from_pos, to_pos)
        self._emit_move(record)

        if self._state.is_game_over:
            self._emit_game_over(self._state.report)
            return True

        self._prompt_current_player()
        return True

    def play_engine_move(self, engine: IEngine | None = None) -> bool:
        """Play a computer move for the side to move.

        Without *engine* the move comes from the side's own :class:`AIPlayer`;
        returns False when the side to move is not a computer player.
        """
        if self._state.is_game_over:
            return False
        state = self._state
        if engine is not None:
            move = engine.select_move(
                state.board, state.side_to_move, state.castling, state.en_passant
            )
        else:
            cp = self.current_player
            if not isinstance(cp, AIPlayer):
                return False
            move = cp.choose_move(state)
        if move is None:
            return False
        return self.submit_move(move.from_pos, move.to_pos)

    def sync_remote(
        self,
        board: Board,
        side_to_move: Color,
        en_passant: Position | None = None,
    ) -> bool:
        """Apply a polled online snapshot; returns whether it changed anything."""
        if not self._state.sync_snapshot(board, side_to_move, en_passant):
            return False
        if self._state.is_game_over:
            self._emit_game_over(self._state.report)
        return True

    # -- Internal helpers -----------------------------------------------------

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._state.phase = GamePhase.AWAITING_MOVE
            self._emit_phase(GamePhase.AWAITING_MOVE)
        else:
            self._state.phase = GamePhase.THINKING
            self._emit_phase(GamePhase.THINKING)
            cp.request_move(self._state)

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_game_over(self, report: StatusReport) -> None:
        _LOGGER.info(
            "Game over after %d plies: %s (%s)",
            self._state.ply_count,
            report.status.value,
            report.winner or report.draw_reason,
        )
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(report)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)


def players_for_mode(
    mode: GameMode,
    human_color: Color = Color.WHITE,
    on_ai_request: Callable[[GameState], None] | None = None,
    engine: IEngine | None = None,
) -> tuple[IPlayer, IPlayer]:
    """(white, black) players for a game mode.

    Computer sides share *engine* when one is given; otherwise each gets
    its own default :class:`MinimaxEngine`. Auto-play uses the shorter
    pacing range. Online games are driven by
    :meth:`GameController.sync_remote` for the opponent's moves, so both
    sides are represented as humans locally.
    """
    if mode == GameMode.ONE_PLAYER:
        ai_color = human_color.opposite
        human = HumanPlayer(human_color)
        ai = AIPlayer(ai_color, engine=engine, on_request_move=on_ai_request)
        return (human, ai) if human_color == Color.WHITE else (ai, human)
    if mode == GameMode.AUTO_PLAY:
        return (
            AIPlayer(
                Color.WHITE,
                "Computer (white)",
                engine,
                delay_ms=AUTO_PLAY_DELAY_MS,
                on_request_move=on_ai_request,
            ),
            AIPlayer(
                Color.BLACK,
                "Computer (black)",
                engine,
                delay_ms=AUTO_PLAY_DELAY_MS,
                on_request_move=on_ai_request,
            ),
        )
    return HumanPlayer(Color.WHITE), HumanPlayer(Color.BLACK)
