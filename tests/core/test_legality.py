"""Tests for legal move filtering: self-check, pins, castling, en passant."""

from khelo.core.board import Board
from khelo.core.enums import CastlingRights, Color
from khelo.core.legality import all_legal_moves, any_legal_moves, legal_destinations
from khelo.core.notation import board_from_placement
from khelo.core.types import Position, parse_square


def _squares(*names: str) -> set[Position]:
    return {parse_square(n) for n in names}


CASTLE_READY = "r3k2r/8/8/8/8/8/8/R3K2R"


class TestSelection:
    def test_empty_square(self, initial_board: Board) -> None:
        assert legal_destinations(initial_board, parse_square("e4"), Color.WHITE) == set()

    def test_opponent_piece(self, initial_board: Board) -> None:
        assert legal_destinations(initial_board, parse_square("e7"), Color.WHITE) == set()

    def test_start_position_has_twenty_moves(self, initial_board: Board) -> None:
        moves = all_legal_moves(initial_board, Color.WHITE)
        assert len(moves) == 20
        assert len(all_legal_moves(initial_board, Color.BLACK)) == 20
        assert (parse_square("g1"), parse_square("f3")) in moves


class TestKingSafety:
    def test_pinned_piece_cannot_leave_line(self) -> None:
        board = board_from_placement("4r2k/8/8/8/8/8/4B3/4K3")
        assert legal_destinations(board, parse_square("e2"), Color.WHITE) == set()

    def test_pinned_rook_slides_along_pin(self) -> None:
        board = board_from_placement("4r2k/8/8/8/8/8/4R3/4K3")
        assert legal_destinations(board, parse_square("e2"), Color.WHITE) == _squares(
            "e3", "e4", "e5", "e6", "e7", "e8"
        )

    def test_king_cannot_step_into_attack(self) -> None:
        board = board_from_placement("3rk3/8/8/8/8/8/8/4K3")
        assert legal_destinations(board, parse_square("e1"), Color.WHITE) == _squares(
            "e2", "f1", "f2"
        )

    def test_must_answer_check(self) -> None:
        # Rook on e8 checks e1; only the blocks on the e-file and king moves help.
        board = board_from_placement("4r2k/8/8/8/8/8/3N4/R3K3")
        moves = all_legal_moves(board, Color.WHITE, CastlingRights.NONE)
        for from_pos, to_pos in moves:
            assert from_pos == parse_square("e1") or to_pos.col == 4
        assert (parse_square("d2"), parse_square("e4")) in moves

    def test_en_passant_exposing_king_is_illegal(self) -> None:
        # Removing both pawns from the fifth rank would open the rook's line.
        board = board_from_placement("4k3/8/8/K2pP2r/8/8/8/8")
        dests = legal_destinations(
            board, parse_square("e5"), Color.WHITE, CastlingRights.NONE, parse_square("d6")
        )
        assert dests == _squares("e6")


class TestCastling:
    def test_both_sides_available(self) -> None:
        board = board_from_placement(CASTLE_READY)
        dests = legal_destinations(board, parse_square("e1"), Color.WHITE)
        assert {parse_square("g1"), parse_square("c1")} <= dests
        black = legal_destinations(board, parse_square("e8"), Color.BLACK)
        assert {parse_square("g8"), parse_square("c8")} <= black

    def test_right_required(self) -> None:
        board = board_from_placement(CASTLE_READY)
        rights = CastlingRights.ALL & ~CastlingRights.WHITE_KINGSIDE
        dests = legal_destinations(board, parse_square("e1"), Color.WHITE, rights)
        assert parse_square("g1") not in dests
        assert parse_square("c1") in dests

    def test_no_rights_no_castling(self) -> None:
        board = board_from_placement(CASTLE_READY)
        dests = legal_destinations(board, parse_square("e1"), Color.WHITE, CastlingRights.NONE)
        assert dests == _squares("d1", "d2", "e2", "f2", "f1")

    def test_blocked_at_start(self, initial_board: Board) -> None:
        assert legal_destinations(initial_board, parse_square("e1"), Color.WHITE) == set()

    def test_not_out_of_check(self) -> None:
        board = board_from_placement("4r2k/8/8/8/8/8/8/R3K2R")
        dests = legal_destinations(board, parse_square("e1"), Color.WHITE)
        assert parse_square("g1") not in dests
        assert parse_square("c1") not in dests

    def test_not_through_attacked_square(self) -> None:
        board = board_from_placement("r3kr2/8/8/8/8/8/8/R3K2R")
        dests = legal_destinations(board, parse_square("e1"), Color.WHITE)
        assert parse_square("g1") not in dests
        assert parse_square("c1") in dests

    def test_not_into_attacked_square(self) -> None:
        board = board_from_placement("r3k1r1/8/8/8/8/8/8/R3K2R")
        dests = legal_destinations(board, parse_square("e1"), Color.WHITE)
        assert parse_square("g1") not in dests

    def test_attacked_rook_path_is_allowed(self) -> None:
        # b1 is attacked, but the king never crosses it.
        board = board_from_placement("1r2k3/8/8/8/8/8/8/R3K2R")
        assert parse_square("c1") in legal_destinations(board, parse_square("e1"), Color.WHITE)

    def test_piece_between(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/RN2K1NR")
        dests = legal_destinations(board, parse_square("e1"), Color.WHITE)
        assert parse_square("g1") not in dests
        assert parse_square("c1") not in dests

    def test_rook_must_be_home(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/R3K3")
        dests = legal_destinations(board, parse_square("e1"), Color.WHITE)
        assert parse_square("g1") not in dests
        assert parse_square("c1") in dests

    def test_enemy_rook_on_home_square(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/4K2r")
        assert parse_square("g1") not in legal_destinations(
            board, parse_square("e1"), Color.WHITE
        )


class TestAnyLegalMoves:
    def test_start_position(self, initial_board: Board) -> None:
        assert any_legal_moves(initial_board, Color.WHITE)

    def test_stalemate(self) -> None:
        board = board_from_placement("7k/8/5KQ1/8/8/8/8/8")
        assert not any_legal_moves(board, Color.BLACK)

    def test_checkmate(self) -> None:
        board = board_from_placement("rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR")
        assert not any_legal_moves(board, Color.WHITE)
        assert all_legal_moves(board, Color.WHITE) == []
