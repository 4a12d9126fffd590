"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. (ranks, files)
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = "abcdefgh"
RANK_NAMES = "12345678"


@dataclass(frozen=True)
class Square:
    """
    Zero-based (rank, file) coordinate.

    rank 0 is White's back rank (the 1st rank), file 0 is the a-file. So Square(1, 4) is e2.
    NOTE: Constructing a square off the board is allowed (raycasting walks off the edge and then asks `is_within_bounds()`).
    The Board refuses to read or write such a square.
    """

    rank: int
    file: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        file = ord(sq[0]) - ord("a")
        rank = int(sq[1:]) - 1
        return cls(rank, file)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a'))}{self.rank + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.rank < BOARD_DIMENSIONS[0]) and (
            0 <= self.file < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_rank: int, d_file: int) -> Square:
        return Square(self.rank + d_rank, self.file + d_file)


def all_squares() -> list[Square]:
    """Every square of the board, rank-major (a1, b1, ..., h1, a2, ...)"""
    return [
        Square(rank, file)
        for rank in range(BOARD_DIMENSIONS[0])
        for file in range(BOARD_DIMENSIONS[1])
    ]


def is_square_name(name: str) -> bool:
    """'a1' - 'h8' only. Plain ASCII: str.isdigit() would also let through characters like '²'."""
    return len(name) == 2 and name[0] in FILE_NAMES and name[1] in RANK_NAMES
