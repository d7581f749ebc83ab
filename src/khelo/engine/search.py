"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from khelo.core.board import Board
    from khelo.core.enums import CastlingRights, Color
    from khelo.core.types import Position


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation.

    ``max_depth`` counts plies from the root: the root enumerates its moves
    and each is scored by a ``max_depth - 1`` ply minimax below it.
    ``tie_break_noise`` is the upper bound of the random amount added to
    every root score; keep it below 1 so only equal scores are reordered.
    """

    max_depth: int = 3
    tie_break_noise: float = 0.5


@dataclass(slots=True, frozen=True)
class AIMove:
    """A move chosen by the engine."""

    from_pos: Position
    to_pos: Position

    def __str__(self) -> str:
        return f"{self.from_pos}{self.to_pos}"


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search, with diagnostics."""

    move: AIMove | None
    score: int
    nodes: int


class IEngine(Protocol):
    """Protocol for move pickers used by the game layer."""

    def select_move(
        self,
        board: Board,
        mover: Color,
        castling: CastlingRights,
        en_passant: Position | None = None,
    ) -> AIMove | None: ...
