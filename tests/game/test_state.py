"""Tests for GameState: move application, status tracking, repetition."""

from __future__ import annotations

import pytest

from khelo.core.enums import CastlingRights, Color, DrawReason, GameResult, GameStatus, PieceType
from khelo.core.notation import board_from_placement
from khelo.core.piece import Piece
from khelo.core.types import parse_square
from khelo.game.interfaces import GamePhase
from khelo.game.state import GameState, MoveRecord


def _play(state: GameState, *moves: str) -> list[MoveRecord]:
    records = []
    for uci in moves:
        from_pos, to_pos = parse_square(uci[:2]), parse_square(uci[2:4])
        assert state.is_legal(from_pos, to_pos), uci
        records.append(state.apply_move(from_pos, to_pos))
    return records


@pytest.fixture
def state() -> GameState:
    game = GameState()
    game.setup()
    return game


class TestSetup:
    def test_initial(self, state: GameState) -> None:
        assert state.side_to_move == Color.WHITE
        assert state.castling == CastlingRights.ALL
        assert state.en_passant is None
        assert state.phase == GamePhase.AWAITING_MOVE
        assert state.report.status == GameStatus.PLAYING
        assert state.ply_count == 0
        assert state.last_move is None

    def test_history_starts_empty(self, state: GameState) -> None:
        assert len(state.history) == 0
        assert state.history.count(state.board, Color.WHITE) == 0

    def test_setup_resets_history(self, state: GameState) -> None:
        _play(state, "g1f3", "g8f6", "f3g1", "f6g8")
        state.setup()
        assert state.ply_count == 0
        assert state.history.count(state.board, Color.WHITE) == 0

    def test_custom_position(self) -> None:
        game = GameState()
        game.setup(board_from_placement("4k3/8/8/8/8/8/8/4K3"), Color.BLACK, CastlingRights.NONE)
        assert game.side_to_move == Color.BLACK
        assert game.report.status == GameStatus.PLAYING

    def test_setup_in_terminal_position(self) -> None:
        game = GameState()
        game.setup(board_from_placement("7k/8/5KQ1/8/8/8/8/8"), Color.BLACK, CastlingRights.NONE)
        assert game.report.status == GameStatus.STALEMATE
        assert game.is_game_over
        assert game.legal_destinations(parse_square("h8")) == set()


class TestApplyMove:
    def test_opening_moves(self, state: GameState) -> None:
        _play(state, "e2e4", "d7d5")
        board = state.board
        assert board[parse_square("e2")] is None
        assert board[parse_square("d7")] is None
        assert board[parse_square("e4")] == Piece.of(Color.WHITE, PieceType.PAWN)
        assert board[parse_square("d5")] == Piece.of(Color.BLACK, PieceType.PAWN)
        assert state.side_to_move == Color.WHITE
        assert state.report.status == GameStatus.PLAYING
        assert state.ply_count == 2
        assert state.last_move == (parse_square("d7"), parse_square("d5"))

    def test_capture_recorded(self, state: GameState) -> None:
        records = _play(state, "e2e4", "d7d5", "e4d5")
        assert records[-1].captured == Piece.of(Color.BLACK, PieceType.PAWN)
        assert records[-1].uci == "e4d5"

    def test_en_passant_available_for_one_ply(self, state: GameState) -> None:
        _play(state, "e2e4", "a7a6", "e4e5", "d7d5")
        assert state.en_passant == parse_square("d6")
        assert parse_square("d6") in state.legal_destinations(parse_square("e5"))

        record = _play(state, "e5d6")[0]
        assert state.board[parse_square("d5")] is None
        assert record.captured == Piece.of(Color.BLACK, PieceType.PAWN)

    def test_en_passant_expires(self, state: GameState) -> None:
        _play(state, "e2e4", "a7a6", "e4e5", "d7d5", "h2h3", "h7h6")
        assert state.en_passant is None
        assert parse_square("d6") not in state.legal_destinations(parse_square("e5"))

    def test_castling(self, state: GameState) -> None:
        records = _play(state, "e2e4", "e7e5", "g1f3", "b8c6", "f1c4", "g8f6", "e1g1")
        assert records[-1].castled
        assert state.board[parse_square("g1")] == Piece.of(Color.WHITE, PieceType.KING)
        assert state.board[parse_square("f1")] == Piece.of(Color.WHITE, PieceType.ROOK)
        assert not state.castling & CastlingRights.WHITE_BOTH
        assert state.castling & CastlingRights.BLACK_BOTH == CastlingRights.BLACK_BOTH

    def test_rights_not_restored_by_returning_rooks(self) -> None:
        game = GameState()
        game.setup(board_from_placement("r3k2r/8/8/8/8/8/8/R3K2R"))
        _play(game, "h1h2", "a8a7", "h2h1", "a7a8")
        assert not game.castling & CastlingRights.WHITE_KINGSIDE
        assert not game.castling & CastlingRights.BLACK_QUEENSIDE
        dests = game.legal_destinations(parse_square("e1"))
        assert parse_square("g1") not in dests
        assert parse_square("c1") in dests

    def test_promotion(self) -> None:
        game = GameState()
        game.setup(board_from_placement("4k3/P7/8/8/8/8/8/4K3"), castling=CastlingRights.NONE)
        record = _play(game, "a7a8")[0]
        assert game.board[parse_square("a8")] == Piece.of(Color.WHITE, PieceType.QUEEN)
        assert record.promoted
        assert record.uci == "a7a8q"
        assert game.report.status == GameStatus.CHECK
        assert record.was_check


class TestGameOver:
    def test_fools_mate(self, state: GameState) -> None:
        records = _play(state, "f2f3", "e7e5", "g2g4", "d8h4")
        assert state.report.status == GameStatus.CHECKMATE
        assert state.report.winner == Color.BLACK
        assert state.result == GameResult.BLACK_WINS
        assert state.phase == GamePhase.GAME_OVER
        assert records[-1].was_check

    def test_no_moves_after_game_over(self, state: GameState) -> None:
        _play(state, "f2f3", "e7e5", "g2g4", "d8h4")
        assert state.legal_destinations(parse_square("e1")) == set()
        with pytest.raises(ValueError):
            state.apply_move(parse_square("a2"), parse_square("a3"))

    def test_threefold_repetition(self, state: GameState) -> None:
        shuffle = ("g1f3", "g8f6", "f3g1", "f6g8")
        _play(state, *shuffle)
        assert not state.is_game_over

        _play(state, *shuffle)
        # The start position is back twice, but setup does not count it.
        assert not state.is_game_over
        assert state.history.count(state.board, Color.WHITE) == 2

        _play(state, "g1f3")
        assert state.is_game_over
        assert state.report.status == GameStatus.DRAW
        assert state.report.draw_reason == DrawReason.THREEFOLD_REPETITION
        assert state.result == GameResult.DRAW
        assert state.history.count(state.board, Color.BLACK) == 3
        assert state.ply_count == 9

    def test_insufficient_material_opt_in(self) -> None:
        game = GameState(detect_insufficient_material=True)
        game.setup(board_from_placement("4k3/8/8/8/8/8/3q4/4K3"), castling=CastlingRights.NONE)
        _play(game, "e1d2")
        assert game.report.draw_reason == DrawReason.INSUFFICIENT_MATERIAL

    def test_insufficient_material_off_by_default(self) -> None:
        game = GameState()
        game.setup(board_from_placement("4k3/8/8/8/8/8/3q4/4K3"), castling=CastlingRights.NONE)
        _play(game, "e1d2")
        assert game.report.status == GameStatus.PLAYING


class TestSyncSnapshot:
    def test_adopts_new_board(self, state: GameState) -> None:
        board = board_from_placement("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR")
        assert state.sync_snapshot(board, Color.BLACK, parse_square("e3"))
        assert state.board == board
        assert state.side_to_move == Color.BLACK
        assert state.en_passant == parse_square("e3")
        assert state.history.count(board, Color.BLACK) == 1

    def test_identical_snapshot_ignored(self, state: GameState) -> None:
        for _ in range(5):
            assert not state.sync_snapshot(state.board, Color.WHITE)
        assert len(state.history) == 0
        assert not state.is_game_over

    def test_prunes_castling_rights(self, state: GameState) -> None:
        board = board_from_placement("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBN1")
        state.sync_snapshot(board, Color.BLACK)
        assert not state.castling & CastlingRights.WHITE_KINGSIDE
        assert state.castling & CastlingRights.WHITE_QUEENSIDE

    def test_mate_snapshot_ends_game(self, state: GameState) -> None:
        board = board_from_placement("rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR")
        assert state.sync_snapshot(board, Color.WHITE)
        assert state.report.status == GameStatus.CHECKMATE
        assert state.is_game_over
