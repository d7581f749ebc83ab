"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence

from khelo.core.enums import Color, PieceType
from khelo.core.piece import Piece
from khelo.core.types import ALL_POSITIONS, POSITIONS, Position

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Immutable 64-square board.

    Every change goes through :meth:`replace`, which returns a new board, so a
    board handed to the search tree or the position history is never aliased
    by a later move.
    """

    __slots__ = ("_squares", "_hash")

    def __init__(self, squares: Iterable[Piece | None] = ()) -> None:
        cells = tuple(squares) or (None,) * 64
        if len(cells) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(cells)}")
        object.__setattr__(self, "_squares", cells)
        object.__setattr__(self, "_hash", None)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Board is immutable")

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        return self._squares[pos.row * 8 + pos.col]

    def at(self, row: int, col: int) -> Piece | None:
        """Piece at (*row*, *col*) without building a :class:`Position`."""
        return self._squares[row * 8 + col]

    def is_empty(self, pos: Position) -> bool:
        return self._squares[pos.row * 8 + pos.col] is None

    def piece_color(self, pos: Position) -> Color | None:
        piece = self[pos]
        return piece.color if piece is not None else None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Position, Piece]]:
        """Occupied squares, optionally limited to *color*'s pieces."""
        for pos, piece in zip(ALL_POSITIONS, self._squares):
            if piece is not None and (color is None or piece.color == color):
                yield pos, piece

    def king_position(self, color: Color) -> Position:
        """Square of *color*'s king (boards without one are out of contract)."""
        for pos, piece in zip(ALL_POSITIONS, self._squares):
            if (
                piece is not None
                and piece.piece_type == PieceType.KING
                and piece.color == color
            ):
                return pos
        raise ValueError(f"No {color.name} king on board")

    def rows(self) -> tuple[tuple[Piece | None, ...], ...]:
        """8x8 view indexed ``[row][col]``."""
        return tuple(self._squares[r * 8 : r * 8 + 8] for r in range(8))

    def piece_count(self) -> int:
        return sum(1 for piece in self._squares if piece is not None)

    # -- Copy-on-write ------------------------------------------------------

    def replace(self, changes: Mapping[Position, Piece | None]) -> Board:
        """New board with *changes* applied; this board is left untouched."""
        cells = list(self._squares)
        for pos, piece in changes.items():
            cells[pos.row * 8 + pos.col] = piece
        return Board(cells)

    # -- Factories ----------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        changes: dict[Position, Piece | None] = {}
        for col, piece_type in enumerate(_BACK_RANK):
            changes[POSITIONS[0][col]] = Piece.of(Color.WHITE, piece_type)
            changes[POSITIONS[1][col]] = Piece.of(Color.WHITE, PieceType.PAWN)
            changes[POSITIONS[6][col]] = Piece.of(Color.BLACK, PieceType.PAWN)
            changes[POSITIONS[7][col]] = Piece.of(Color.BLACK, piece_type)
        return cls().replace(changes)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Piece | None]]) -> Board:
        """Build from an 8x8 ``[row][col]`` grid."""
        if len(rows) != 8 or any(len(row) != 8 for row in rows):
            raise ValueError("Board rows must form an 8x8 grid")
        return cls(piece for row in rows for piece in row)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        cached = self._hash
        if cached is None:
            cached = hash(self._squares)
            object.__setattr__(self, "_hash", cached)
        return cached

    def __repr__(self) -> str:
        lines: list[str] = []
        for row in range(7, -1, -1):
            cells = [str(p) if p else "." for p in self._squares[row * 8 : row * 8 + 8]]
            lines.append(f"{row + 1} {' '.join(cells)}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
