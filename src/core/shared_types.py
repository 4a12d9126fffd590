"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


# --- Color and PieceType DO NOT contain options for empty squares (the boundary only ever talks about occupied squares).
# --- NOTE Same names as the domain enums in src/chess/pieces.py. Let the imports show which versions are used where.


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
