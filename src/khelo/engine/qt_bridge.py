"""Qt bridge to run the engine search in a worker thread.

The engine itself is synchronous. A host moves an :class:`EngineWorker` to a
``QThread`` and talks to it through queued signals so the search never blocks
the interaction thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from khelo.core.board import Board
from khelo.core.enums import CastlingRights, Color
from khelo.core.types import Position
from khelo.engine.minimax import MinimaxEngine
from khelo.engine.search import IEngine, SearchLimits

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """Immutable snapshot the worker searches from."""

    board: Board
    mover: Color
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Position | None = None


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand."""

    best_move_ready = pyqtSignal(int, object)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    def __init__(self, *, max_depth: int = 3, engine: IEngine | None = None) -> None:
        super().__init__()
        self._engine: IEngine = engine or MinimaxEngine(SearchLimits(max_depth=max_depth))

    @pyqtSlot(object, int)
    def request_move(self, request_obj: object, request_id: int) -> None:
        """Search *request_obj* and emit the outcome tagged with *request_id*."""
        if not isinstance(request_obj, SearchRequest):
            self.search_error.emit(request_id, "Engine received invalid request")
            return

        try:
            move = self._engine.select_move(
                request_obj.board,
                request_obj.mover,
                request_obj.castling,
                request_obj.en_passant,
            )
        except Exception as exc:
            _LOGGER.exception("Engine search %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if move is None:
            self.search_no_move.emit(request_id)
            return
        self.best_move_ready.emit(request_id, move)

    @pyqtSlot(int)
    def set_limits(self, max_depth: int) -> None:
        """Update search depth (takes effect on the next search)."""
        if isinstance(self._engine, MinimaxEngine):
            noise = self._engine.limits.tie_break_noise
            self._engine.set_limits(SearchLimits(max_depth=max_depth, tie_break_noise=noise))
