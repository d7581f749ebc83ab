"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from khelo.core.enums import Color, PieceType

# Board letters in PieceType order; uppercase is white.
_LETTERS = "pnbrqk"

_PIECE_LETTERS: dict[tuple[Color, PieceType], str] = {
    (color, ptype): letter.upper() if color == Color.WHITE else letter
    for color in Color
    for ptype, letter in zip(PieceType, _LETTERS)
}
_LETTER_KEYS: dict[str, tuple[Color, PieceType]] = {v: k for k, v in _PIECE_LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable tagged value for the content of an occupied square.

    Instances are shared: :meth:`of` and :meth:`from_char` hand out one
    object per (color, type) pair.
    """

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        return _PIECE_LETTERS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Piece for a placement letter, e.g. 'N' -> white knight."""
        try:
            return _PIECES[_LETTER_KEYS[char]]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None

    @classmethod
    def of(cls, color: Color, piece_type: PieceType) -> Piece:
        return _PIECES[(color, piece_type)]

    def is_a(self, color: Color, piece_type: PieceType) -> bool:
        return self.color == color and self.piece_type == piece_type


_PIECES: dict[tuple[Color, PieceType], Piece] = {key: Piece(*key) for key in _PIECE_LETTERS}
