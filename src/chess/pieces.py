"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self


class PieceType(Enum):
    EMPTY = auto()
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    NONE = auto()
    WHITE = auto()
    BLACK = auto()

    @property
    def opponent(self) -> "Color":
        """The other side. An empty square has no opponent."""
        if self == Color.WHITE:
            return Color.BLACK
        if self == Color.BLACK:
            return Color.WHITE
        return Color.NONE


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}


@dataclass(frozen=True)
class Piece:
    """
    Either the empty marker (EMPTY, NONE) or a (kind, side) pair.
    Immutable value: two white rooks compare equal, identity is given by the square they stand on.
    """

    type: PieceType
    color: Color

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    @property
    def is_empty(self) -> bool:
        return self.type == PieceType.EMPTY

    def promoted(self, new_type: PieceType) -> Self:
        """Same side, new kind. Pieces are values, so this returns a new one."""
        return type(self)(new_type, self.color)


EMPTY_SQUARE = Piece(PieceType.EMPTY, Color.NONE)
