"""Chess engine package: evaluation, minimax search and the Qt worker bridge.

The Qt bridge is not re-exported; import :mod:`khelo.engine.qt_bridge`
where a Qt event loop exists.
"""

from khelo.engine.evaluate import PIECE_VALUES, evaluate, piece_square_bonus
from khelo.engine.minimax import MATE_SCORE, MinimaxEngine, select_move
from khelo.engine.search import AIMove, IEngine, SearchLimits, SearchResult

DefaultEngine: type[IEngine] = MinimaxEngine

__all__ = [
    "AIMove",
    "DefaultEngine",
    "IEngine",
    "MATE_SCORE",
    "MinimaxEngine",
    "PIECE_VALUES",
    "SearchLimits",
    "SearchResult",
    "evaluate",
    "piece_square_bonus",
    "select_move",
]
