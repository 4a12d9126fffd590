"""unit tests for src/chess/castling.py"""

import pytest

from src.chess.castling import (
    CASTLING_RULES,
    CastlingDirection,
    CastlingSquares,
    RookSide,
    Square,
    castling_directions,
    squares_between_on_rank,
)
from src.chess.pieces import Color


def test_castling_squares_creation() -> None:
    """Test one case, just to have a little contract stating: 'I want to be able to create this dataclass'"""
    castling_squares = CastlingSquares.from_algebraic("e1", "g1", "h1", "f1")
    assert castling_squares.king_from == Square.from_algebraic("e1")
    assert castling_squares.king_to == Square.from_algebraic("g1")
    assert castling_squares.rook_from == Square.from_algebraic("h1")
    assert castling_squares.rook_to == Square.from_algebraic("f1")


@pytest.mark.parametrize(
    "color, rook_side, direction",
    [
        (Color.WHITE, RookSide.KING_SIDE, CastlingDirection.WHITE_KING_SIDE),
        (Color.WHITE, RookSide.QUEEN_SIDE, CastlingDirection.WHITE_QUEEN_SIDE),
        (Color.BLACK, RookSide.KING_SIDE, CastlingDirection.BLACK_KING_SIDE),
        (Color.BLACK, RookSide.QUEEN_SIDE, CastlingDirection.BLACK_QUEEN_SIDE),
    ],
)
def test_direction_from_color_and_rook_side(
    color: Color, rook_side: RookSide, direction: CastlingDirection
) -> None:
    assert CastlingDirection.of(color, rook_side) == direction
    assert direction.color == color
    assert direction.rook_side == rook_side


def test_castling_directions_per_color() -> None:
    assert castling_directions(Color.BLACK) == [
        CastlingDirection.BLACK_KING_SIDE,
        CastlingDirection.BLACK_QUEEN_SIDE,
    ]


def test_squares_between_on_rank() -> None:
    between = squares_between_on_rank(
        Square.from_algebraic("e1"), Square.from_algebraic("a1")
    )
    assert [sq.to_algebraic() for sq in between] == ["d1", "c1", "b1"]


def test_squares_between_requires_same_rank() -> None:
    with pytest.raises(ValueError):
        squares_between_on_rank(Square.from_algebraic("e1"), Square.from_algebraic("e8"))


def test_queen_side_path() -> None:
    """b1 must be empty, but the king never crosses it (so it may be attacked)"""
    rule = CASTLING_RULES[CastlingDirection.WHITE_QUEEN_SIDE]
    assert [sq.to_algebraic() for sq in rule.squares_between()] == ["d1", "c1", "b1"]
    assert [sq.to_algebraic() for sq in rule.king_path()] == ["e1", "d1", "c1"]


def test_king_side_path() -> None:
    rule = CASTLING_RULES[CastlingDirection.BLACK_KING_SIDE]
    assert [sq.to_algebraic() for sq in rule.squares_between()] == ["f8", "g8"]
    assert [sq.to_algebraic() for sq in rule.king_path()] == ["e8", "f8", "g8"]
