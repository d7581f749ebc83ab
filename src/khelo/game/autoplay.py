"""AI-vs-AI driver."""

from __future__ import annotations

import logging

from khelo.core.rules import StatusReport
from khelo.engine.search import IEngine
from khelo.game.controller import GameController, players_for_mode
from khelo.game.interfaces import GameMode

_LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_PLIES = 300


def run_autoplay(
    controller: GameController,
    engine: IEngine | None = None,
    max_plies: int = DEFAULT_MAX_PLIES,
    *,
    new_game: bool = True,
) -> StatusReport:
    """Play engine moves for both sides until the game ends or *max_plies*.

    Without *engine* each side plays with its own :class:`AIPlayer` engine.
    Runs synchronously with no pacing; hosts that want the UI delays call
    :meth:`GameController.play_engine_move` after
    :meth:`AIPlayer.move_delay_ms` instead.
    """
    if new_game:
        white, black = players_for_mode(GameMode.AUTO_PLAY, engine=engine)
        controller.new_game(white, black)

    state = controller.state
    start_ply = state.ply_count
    while not state.is_game_over and state.ply_count - start_ply < max_plies:
        if not controller.play_engine_move(engine):
            break

    _LOGGER.debug(
        "Auto-play stopped after %d plies: %s",
        state.ply_count - start_ply,
        state.report.status.value,
    )
    return state.report
