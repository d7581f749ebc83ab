"""Abstract interfaces for the game layer.

The controller depends on these ABCs, not on concrete players.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum, IntEnum, auto
from typing import TYPE_CHECKING

from khelo.core.enums import Color

if TYPE_CHECKING:
    from khelo.core.types import Position
    from khelo.game.state import GameState


# -- Game phase FSM states ----------------------------------------------------


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()  # AI is computing
    GAME_OVER = auto()


class GameMode(Enum):
    """Who controls each side."""

    TWO_PLAYERS = "two-players"
    ONE_PLAYER = "one-player"  # human White vs AI Black
    AUTO_PLAY = "auto-play"  # AI vs AI
    ONLINE = "online"  # both sides arrive as remote snapshots


# -- Abstract interfaces ---------------------------------------------------


class IPlayer(ABC):
    """Interface for a game participant (human or AI)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, state: GameState) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (they interact via UI).
        For AI this hands the position to whatever runs the search.
        """


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, white: IPlayer, black: IPlayer) -> None:
        """Set up a new game."""

    @abstractmethod
    def legal_destinations(self, from_pos: Position) -> set[Position]:
        """Squares the side to move may reach from *from_pos*."""

    @abstractmethod
    def submit_move(self, from_pos: Position, to_pos: Position) -> bool:
        """Submit a move. Returns True if legal and applied."""
