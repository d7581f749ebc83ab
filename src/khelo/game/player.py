"""Human and computer participants."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Callable

from khelo.core.enums import Color
from khelo.engine.minimax import MinimaxEngine
from khelo.engine.search import AIMove, IEngine
from khelo.game.interfaces import IPlayer

if TYPE_CHECKING:
    from khelo.game.state import GameState

# Pause (ms) a host waits before playing a computer move so the game is watchable.
AI_MOVE_DELAY_MS: tuple[int, int] = (800, 2000)
AUTO_PLAY_DELAY_MS: tuple[int, int] = (600, 1500)


class HumanPlayer(IPlayer):
    """Moves arrive from the board UI through ``GameController.submit_move``."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or color.name.title()

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, state: GameState) -> None:
        pass


class AIPlayer(IPlayer):
    """A computer side backed by an :class:`IEngine`.

    The player owns the engine and the pacing range for its moves. When the
    controller prompts it, *on_request_move* is told about the position so
    the host can schedule :meth:`choose_move` (directly, on a timer after
    :meth:`move_delay_ms`, or on an ``EngineWorker`` thread).

    Args:
        color: Side the AI plays.
        name: Display name.
        engine: Searcher to consult. Defaults to a :class:`MinimaxEngine`
            at its default depth.
        delay_ms: Inclusive ``(low, high)`` pause before each move.
        rng: Source for the pause length (and for the default engine).
        on_request_move: ``(GameState) -> None`` hook fired when it is
            this player's turn.
    """

    __slots__ = ("_color", "_name", "_engine", "_delay_ms", "_rng", "_on_request_move")

    def __init__(
        self,
        color: Color,
        name: str = "Computer",
        engine: IEngine | None = None,
        *,
        delay_ms: tuple[int, int] = AI_MOVE_DELAY_MS,
        rng: random.Random | None = None,
        on_request_move: Callable[[GameState], None] | None = None,
    ) -> None:
        low, high = delay_ms
        if low < 0 or high < low:
            raise ValueError(f"Invalid move delay range: {delay_ms}")
        self._color = color
        self._name = name
        self._rng = rng or random.Random()
        self._engine = engine if engine is not None else MinimaxEngine(rng=self._rng)
        self._delay_ms = (low, high)
        self._on_request_move = on_request_move

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def engine(self) -> IEngine:
        return self._engine

    @property
    def delay_ms(self) -> tuple[int, int]:
        return self._delay_ms

    def move_delay_ms(self) -> int:
        """A pause length drawn uniformly from :attr:`delay_ms`."""
        return self._rng.randint(*self._delay_ms)

    def request_move(self, state: GameState) -> None:
        if self._on_request_move is not None:
            self._on_request_move(state)

    def choose_move(self, state: GameState) -> AIMove | None:
        """Ask the engine for a move in *state*; ``None`` when it has none."""
        if state.side_to_move != self._color:
            raise ValueError(f"Not {self._color.name.lower()}'s turn")
        return self._engine.select_move(
            state.board, state.side_to_move, state.castling, state.en_passant
        )
