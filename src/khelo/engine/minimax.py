"""Fixed-depth minimax engine (negamax form) with alpha-beta pruning."""

from __future__ import annotations

import logging
import random
from time import perf_counter

from khelo.core.board import Board
from khelo.core.enums import CastlingRights, Color
from khelo.core.legality import LegalMove, all_legal_moves
from khelo.core.move_applier import play_move, update_castling_rights
from khelo.core.move_generator import MoveGenerator
from khelo.core.types import Position
from khelo.engine.evaluate import PIECE_VALUES, evaluate
from khelo.engine.search import AIMove, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000
MATE_SCORE = 100_000


class MinimaxEngine(IEngine):
    """Full-width depth-limited searcher.

    The search has no repetition awareness and does not model en passant
    below the root. Castling rights are carried through the tree.
    """

    __slots__ = ("_limits", "_rng", "_nodes")

    def __init__(
        self,
        limits: SearchLimits | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._limits = limits or SearchLimits()
        if self._limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")
        self._rng = rng or random.Random()
        self._nodes = 0

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    def set_limits(self, limits: SearchLimits) -> None:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")
        self._limits = limits

    def select_move(
        self,
        board: Board,
        mover: Color,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Position | None = None,
    ) -> AIMove | None:
        """Best move for *mover*, or ``None`` when it has no legal move."""
        return self.search(board, mover, castling, en_passant).move

    def search(
        self,
        board: Board,
        mover: Color,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Position | None = None,
    ) -> SearchResult:
        self._nodes = 0
        started = perf_counter()

        root_moves = all_legal_moves(board, mover, castling, en_passant)
        if not root_moves:
            in_check = MoveGenerator(board).king_under_attack(mover)
            return SearchResult(None, -MATE_SCORE if in_check else 0, self._nodes)

        opponent = mover.opposite
        depth = self._limits.max_depth - 1
        noise = self._limits.tie_break_noise

        best_move: LegalMove | None = None
        best_score = -_INF_SCORE
        best_noisy = float("-inf")

        for from_pos, to_pos in self._order_moves(board, root_moves):
            piece = board[from_pos]
            assert piece is not None
            child = play_move(board, from_pos, to_pos, mover, en_passant)
            child_rights = update_castling_rights(castling, piece, from_pos)

            # Window just below the best exact score: worse moves fail low
            # under it, equal moves come back exact and compete on noise.
            alpha = best_score - 1 if best_score > -_INF_SCORE else -_INF_SCORE
            score = -self._negamax(child, opponent, child_rights, depth, -_INF_SCORE, -alpha)

            noisy = score + self._rng.random() * noise
            if score > best_score:
                best_score = score
            if noisy > best_noisy:
                best_noisy = noisy
                best_move = (from_pos, to_pos)

        assert best_move is not None
        _LOGGER.debug(
            "%s picks %s%s: score=%d nodes=%d in %.0f ms",
            mover,
            best_move[0],
            best_move[1],
            best_score,
            self._nodes,
            (perf_counter() - started) * 1000,
        )
        return SearchResult(AIMove(*best_move), best_score, self._nodes)

    def _negamax(
        self,
        board: Board,
        mover: Color,
        castling: CastlingRights,
        depth: int,
        alpha: int,
        beta: int,
    ) -> int:
        """Score of *board* for *mover* (the side to move)."""
        self._nodes += 1
        if depth <= 0:
            return evaluate(board, mover)

        legal = all_legal_moves(board, mover, castling)
        if not legal:
            if MoveGenerator(board).king_under_attack(mover):
                # More depth left means the mate came sooner.
                return -(MATE_SCORE + depth)
            return 0

        opponent = mover.opposite
        best_score = -_INF_SCORE
        for from_pos, to_pos in self._order_moves(board, legal):
            piece = board[from_pos]
            assert piece is not None
            child = play_move(board, from_pos, to_pos, mover)
            score = -self._negamax(
                child,
                opponent,
                update_castling_rights(castling, piece, from_pos),
                depth - 1,
                -beta,
                -alpha,
            )

            if score > best_score:
                best_score = score
            if score > alpha:
                alpha = score
            if alpha >= beta:
                break
        return best_score

    def _order_moves(self, board: Board, moves: list[LegalMove]) -> list[LegalMove]:
        """Captures first, most valuable victim / least valuable attacker."""
        return sorted(moves, key=lambda move: self._move_order_score(board, move), reverse=True)

    def _move_order_score(self, board: Board, move: LegalMove) -> int:
        target = board[move[1]]
        if target is None:
            return 0
        attacker = board[move[0]]
        assert attacker is not None
        return 10 * PIECE_VALUES[target.piece_type] - PIECE_VALUES[attacker.piece_type]


def select_move(
    board: Board,
    mover: Color,
    castling: CastlingRights = CastlingRights.ALL,
    en_passant: Position | None = None,
) -> AIMove | None:
    """Pick a move for *mover* with the default search limits."""
    return MinimaxEngine().select_move(board, mover, castling, en_passant)
