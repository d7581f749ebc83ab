"""Game management layer - controller, players, state, online sync, stats.

Quick start::

    from khelo.game import GameController, GameMode, players_for_mode

    ctrl = GameController()
    ctrl.new_game(*players_for_mode(GameMode.TWO_PLAYERS))
    ctrl.submit_move(parse_square("e2"), parse_square("e4"))
"""

from khelo.game.autoplay import run_autoplay
from khelo.game.controller import GameController, GameEvents, players_for_mode
from khelo.game.interfaces import GameMode, GamePhase, IGameController, IPlayer
from khelo.game.online import (
    POLL_INTERVAL_MS,
    RemoteSnapshot,
    board_from_remote,
    board_to_remote,
)
from khelo.game.player import (
    AI_MOVE_DELAY_MS,
    AUTO_PLAY_DELAY_MS,
    AIPlayer,
    HumanPlayer,
)
from khelo.game.state import GameState, MoveRecord
from khelo.game.stats import MatchOutcome, classify_outcome, points_for

__all__ = [
    # Interfaces
    "GameMode",
    "GamePhase",
    "IGameController",
    "IPlayer",
    # Concrete
    "AI_MOVE_DELAY_MS",
    "AUTO_PLAY_DELAY_MS",
    "AIPlayer",
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
    "players_for_mode",
    "run_autoplay",
    # Online
    "POLL_INTERVAL_MS",
    "RemoteSnapshot",
    "board_from_remote",
    "board_to_remote",
    # Stats
    "MatchOutcome",
    "classify_outcome",
    "points_for",
]
