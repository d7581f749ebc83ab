"""Result classification handed to the stats / leaderboard collaborator."""

from __future__ import annotations

from enum import Enum

from khelo.core.enums import Color, GameStatus
from khelo.core.rules import StatusReport

WIN_POINTS = 10
DRAW_POINTS = 3


class MatchOutcome(Enum):
    """Result from the human player's point of view."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


def classify_outcome(report: StatusReport, human_color: Color | None) -> MatchOutcome | None:
    """Win/loss/draw for *human_color*, or ``None`` if there is nothing to report.

    Games still in progress and games without a human side (auto-play) have
    no outcome.
    """
    if human_color is None or not report.is_terminal:
        return None
    if report.status == GameStatus.CHECKMATE:
        return MatchOutcome.WIN if report.winner == human_color else MatchOutcome.LOSS
    return MatchOutcome.DRAW


def points_for(outcome: MatchOutcome | None, authenticated: bool = True) -> int:
    """Leaderboard points earned; guests never earn points."""
    if outcome is None or not authenticated:
        return 0
    if outcome == MatchOutcome.WIN:
        return WIN_POINTS
    if outcome == MatchOutcome.DRAW:
        return DRAW_POINTS
    return 0
