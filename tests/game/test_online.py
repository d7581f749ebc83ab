"""Tests for the online snapshot contract."""

from __future__ import annotations

from typing import Any

import pytest

from khelo.core.board import Board
from khelo.core.enums import Color, GameStatus, PieceType
from khelo.core.notation import board_from_placement
from khelo.core.piece import Piece
from khelo.core.types import parse_square
from khelo.game.controller import GameController, players_for_mode
from khelo.game.interfaces import GameMode
from khelo.game.online import RemoteSnapshot, board_from_remote, board_to_remote


def _payload(board: Board, turn: str = "white", **extra: Any) -> dict[str, Any]:
    return {"board": board_to_remote(board), "currentTurn": turn, **extra}


class TestRemoteBoard:
    def test_cell_layout(self, initial_board: Board) -> None:
        cells = board_to_remote(initial_board)
        assert cells[0][4] == {
            "pieceType": "king",
            "color": "white",
            "position": {"x": 4, "y": 0},
        }
        assert cells[3][3] is None
        assert cells[7][3]["pieceType"] == "queen"

    def test_decodes_back(self, initial_board: Board) -> None:
        assert board_from_remote(board_to_remote(initial_board)) == initial_board

    def test_unknown_piece(self) -> None:
        cells: list[list[Any]] = [[None] * 8 for _ in range(8)]
        cells[0][0] = {"pieceType": "wizard", "color": "white"}
        with pytest.raises(ValueError):
            board_from_remote(cells)

    def test_bad_shape(self) -> None:
        with pytest.raises(ValueError):
            board_from_remote([[None] * 8] * 7)


class TestRemoteSnapshot:
    def test_from_payload(self, initial_board: Board) -> None:
        snap = RemoteSnapshot.from_payload(
            _payload(initial_board, "black", enPassantTarget={"x": 4, "y": 2})
        )
        assert snap.board == initial_board
        assert snap.side_to_move == Color.BLACK
        assert snap.en_passant == parse_square("e3")
        assert snap.winner is None

    def test_winner(self, initial_board: Board) -> None:
        snap = RemoteSnapshot.from_payload(_payload(initial_board, winner="black"))
        assert snap.winner == Color.BLACK

    def test_to_payload(self) -> None:
        board = Board.empty().replace(
            {parse_square("a1"): Piece.of(Color.BLACK, PieceType.ROOK)}
        )
        payload = RemoteSnapshot(board, Color.WHITE, parse_square("d6")).to_payload()
        assert payload["currentTurn"] == "white"
        assert payload["enPassantTarget"] == {"x": 3, "y": 5}
        assert payload["board"][0][0]["color"] == "black"
        assert "winner" not in payload

    def test_missing_key(self, initial_board: Board) -> None:
        with pytest.raises(ValueError):
            RemoteSnapshot.from_payload({"board": board_to_remote(initial_board)})

    def test_invalid_color(self, initial_board: Board) -> None:
        with pytest.raises(ValueError):
            RemoteSnapshot.from_payload(_payload(initial_board, "green"))

    def test_invalid_position(self, initial_board: Board) -> None:
        with pytest.raises(ValueError):
            RemoteSnapshot.from_payload(
                _payload(initial_board, enPassantTarget={"x": 9, "y": 2})
            )


class TestPolling:
    def test_repeated_polls_do_not_count_as_repetition(self, initial_board: Board) -> None:
        ctrl = GameController()
        ctrl.new_game(*players_for_mode(GameMode.ONLINE))
        snap = RemoteSnapshot.from_payload(_payload(initial_board))
        for _ in range(5):
            ctrl.sync_remote(snap.board, snap.side_to_move, snap.en_passant)
        assert not ctrl.state.is_game_over
        assert ctrl.state.report.status == GameStatus.PLAYING

    def test_remote_moves_feed_repetition(self) -> None:
        ctrl = GameController()
        ctrl.new_game(*players_for_mode(GameMode.ONLINE))
        start = Board.initial()
        knight_out = board_from_placement("rnbqkbnr/pppppppp/8/8/8/5N2/PPPPPPPP/RNBQKB1R")
        both_out = board_from_placement("rnbqkb1r/pppppppp/5n2/8/8/5N2/PPPPPPPP/RNBQKB1R")
        black_out = board_from_placement("rnbqkb1r/pppppppp/5n2/8/8/8/PPPPPPPP/RNBQKBNR")
        for _ in range(2):
            ctrl.sync_remote(knight_out, Color.BLACK)
            ctrl.sync_remote(both_out, Color.WHITE)
            ctrl.sync_remote(black_out, Color.BLACK)
            ctrl.sync_remote(start, Color.WHITE)
        assert not ctrl.state.is_game_over
        ctrl.sync_remote(knight_out, Color.BLACK)
        assert ctrl.state.is_game_over
        assert ctrl.state.report.status == GameStatus.DRAW
