"""Pseudo-legal destination generation + attack detection."""

from __future__ import annotations

from khelo.core.board import Board
from khelo.core.enums import Color, PieceType
from khelo.core.types import ALL_POSITIONS, POSITIONS, Position

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Row step of a pawn move and the row pawns start on, per color.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}

_Rays = tuple[tuple[Position, ...], ...]


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(offsets: tuple[tuple[int, int], ...]) -> tuple[tuple[Position, ...], ...]:
    targets: list[tuple[Position, ...]] = []
    for pos in ALL_POSITIONS:
        moves: list[Position] = []
        for dr, dc in offsets:
            to_pos = pos.offset(dr, dc)
            if to_pos is not None:
                moves.append(to_pos)
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(directions: tuple[tuple[int, int], ...]) -> tuple[_Rays, ...]:
    rays_per_square: list[_Rays] = []
    for pos in ALL_POSITIONS:
        square_rays: list[tuple[Position, ...]] = []
        for dr, dc in directions:
            ray: list[Position] = []
            row = pos.row + dr
            col = pos.col + dc
            while 0 <= row < 8 and 0 <= col < 8:
                ray.append(POSITIONS[row][col])
                row += dr
                col += dc
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_pawn_attackers() -> dict[Color, tuple[tuple[Position, ...], ...]]:
    """Squares from which a pawn of each color attacks a given square."""
    attackers: dict[Color, tuple[tuple[Position, ...], ...]] = {}
    for color, direction in PAWN_DIRECTION.items():
        per_square: list[tuple[Position, ...]] = []
        for pos in ALL_POSITIONS:
            origins = (pos.offset(-direction, -1), pos.offset(-direction, 1))
            per_square.append(tuple(o for o in origins if o is not None))
        attackers[color] = tuple(per_square)
    return attackers


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_PAWN_ATTACKERS = _build_pawn_attackers()

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS: dict[PieceType, tuple[_Rays, ...]] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


class MoveGenerator:
    """Per-piece movement rules over a single :class:`Board`.

    Destinations are pseudo-legal: they obey the piece's pattern and board
    occupancy but may leave the mover's own king in check. Castling is not
    produced here; see :mod:`khelo.core.legality`.
    """

    __slots__ = ("_board", "_en_passant")

    def __init__(self, board: Board, en_passant: Position | None = None) -> None:
        self._board = board
        self._en_passant = en_passant

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_destinations(self, from_pos: Position) -> set[Position]:
        """Candidate destinations for the piece on *from_pos* (empty if none)."""
        piece = self._board[from_pos]
        if piece is None:
            return set()

        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            return self._gen_pawn(from_pos, piece.color)
        if ptype == PieceType.KNIGHT:
            return self._gen_step(_KNIGHT_TARGETS[from_pos.index], piece.color)
        if ptype == PieceType.KING:
            return self._gen_step(_KING_TARGETS[from_pos.index], piece.color)
        return self._gen_sliding(_SLIDER_RAYS[ptype][from_pos.index], piece.color)

    # -- Attack detection ---------------------------------------------------

    def is_square_attacked(self, square: Position, by_color: Color) -> bool:
        """Is *square* attacked by any piece of *by_color*?

        Walks the movement rules backwards from *square*. Pawns attack
        diagonally whether or not the square is occupied.
        """
        board = self._board
        idx = square.index

        for origin in _PAWN_ATTACKERS[by_color][idx]:
            piece = board[origin]
            if piece is not None and piece.color == by_color and piece.piece_type == PieceType.PAWN:
                return True

        for origin in _KNIGHT_TARGETS[idx]:
            piece = board[origin]
            if piece is not None and piece.color == by_color and piece.piece_type == PieceType.KNIGHT:
                return True

        for origin in _KING_TARGETS[idx]:
            piece = board[origin]
            if piece is not None and piece.color == by_color and piece.piece_type == PieceType.KING:
                return True

        if self._ray_hits(_BISHOP_RAYS[idx], by_color, PieceType.BISHOP):
            return True
        return self._ray_hits(_ROOK_RAYS[idx], by_color, PieceType.ROOK)

    def king_under_attack(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_pos = self._board.king_position(color)
        return self.is_square_attacked(king_pos, color.opposite)

    # -- Piece-specific generators (private) -------------------------------

    def _ray_hits(self, rays: _Rays, by_color: Color, slider: PieceType) -> bool:
        board = self._board
        for ray in rays:
            for pos in ray:
                piece = board[pos]
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in (slider, PieceType.QUEEN):
                    return True
                break
        return False

    def _gen_pawn(self, from_pos: Position, color: Color) -> set[Position]:
        board = self._board
        direction = PAWN_DIRECTION[color]
        moves: set[Position] = set()

        one_step = from_pos.offset(direction, 0)
        if one_step is None:
            return moves
        if board.is_empty(one_step):
            moves.add(one_step)
            if from_pos.row == PAWN_START_ROW[color]:
                two_step = one_step.offset(direction, 0)
                if two_step is not None and board.is_empty(two_step):
                    moves.add(two_step)

        for d_col in (-1, 1):
            cap_pos = from_pos.offset(direction, d_col)
            if cap_pos is None:
                continue
            target = board[cap_pos]
            if target is not None:
                if target.color != color:
                    moves.add(cap_pos)
            elif cap_pos == self._en_passant:
                moves.add(cap_pos)
        return moves

    def _gen_step(self, targets: tuple[Position, ...], color: Color) -> set[Position]:
        board = self._board
        moves: set[Position] = set()
        for to_pos in targets:
            target = board[to_pos]
            if target is None or target.color != color:
                moves.add(to_pos)
        return moves

    def _gen_sliding(self, rays: _Rays, color: Color) -> set[Position]:
        board = self._board
        moves: set[Position] = set()
        for ray in rays:
            for to_pos in ray:
                target = board[to_pos]
                if target is None:
                    moves.add(to_pos)
                    continue
                if target.color != color:
                    moves.add(to_pos)
                break
        return moves


# -- Functional entry points -------------------------------------------------


def pseudo_legal_destinations(
    board: Board,
    from_pos: Position,
    en_passant: Position | None = None,
) -> set[Position]:
    return MoveGenerator(board, en_passant).pseudo_legal_destinations(from_pos)


def is_square_attacked(board: Board, square: Position, by_color: Color) -> bool:
    return MoveGenerator(board).is_square_attacked(square, by_color)


def king_under_attack(board: Board, color: Color) -> bool:
    return MoveGenerator(board).king_under_attack(color)
