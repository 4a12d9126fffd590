"""The Game board holds the `position` (in chess: the configuration of pieces on the board) and whose turn it is"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Self

from src.chess.moves import ATTACK_RULES, MOVEMENT_RULES, CandidateMovesFn, Move
from src.chess.pieces import EMPTY_SQUARE, Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square, all_squares
from src.core.exceptions import InvalidFENError, OutOfRangeError

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
# ASCII 1-8 only: str.isdigit() also accepts characters int() cannot read
EMPTY_RUN_LENGTHS = "12345678"


@dataclass
class Board:
    position: dict[Square, Piece]
    side_to_move: Color = field(default=Color.WHITE)

    @classmethod
    def from_fen(cls, fen_str: str, side_to_move: Color = Color.WHITE) -> Self:
        """Construct a board using the first part of a FEN string, the one that denotes the board position.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, read from the a-file: rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.
        """
        num_ranks, num_files = BOARD_DIMENSIONS
        position: dict[Square, Piece] = {square: EMPTY_SQUARE for square in all_squares()}
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != num_ranks:
            raise InvalidFENError(f"Expected {num_ranks} ranks in position: {fen_str}")

        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = num_ranks - 1 - rank_idx
            # ... but the first character is the a-file, so reads in normal direction
            file = 0
            for character in fen_one_rank:
                if character in EMPTY_RUN_LENGTHS:
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
                    continue
                if file >= num_files:
                    raise InvalidFENError(f"Too many squares on a rank: {fen_one_rank}")
                try:
                    position[Square(rank, file)] = Piece.from_fen(character)
                except KeyError as e:
                    raise InvalidFENError(
                        f"Unknown piece character {character!r} in {fen_str}"
                    ) from e
                file += 1
            if file != num_files:
                raise InvalidFENError(f"Rank does not cover the board: {fen_one_rank}")
        return cls(position, side_to_move)

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_POSITION_FEN)

    def copy(self) -> Self:
        """Independent snapshot. Pieces are immutable values, so copying the mapping is enough."""
        return type(self)(dict(self.position), self.side_to_move)

    # --- LOOKUPS ---
    def piece(self, square: Square) -> Piece:
        self._assert_on_board(square)
        return self.position[square]

    def piece_at(self, square: Square) -> Piece:
        return self.piece(square)

    def is_empty(self, square: Square) -> bool:
        return self.piece(square).is_empty

    def is_any_occupied(self, squares: Iterable[Square]) -> bool:
        return any(not self.is_empty(square) for square in squares)

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square for square, piece in self.position.items() if piece.color == color
        ]

    def locate_king(self, color: Color) -> Optional[Square]:
        """Normally there is exactly one. A custom set up position might not have one."""
        king = Piece(PieceType.KING, color)
        return next(
            (square for square, piece in self.position.items() if piece == king),
            None,
        )

    # --- PRIMITIVE (UNCHECKED) MUTATIONS ---
    def place_piece(self, piece: Piece, square: Square) -> None:
        self._assert_on_board(square)
        self.position[square] = piece

    def remove_piece(self, square: Square) -> None:
        self.place_piece(EMPTY_SQUARE, square)

    def raw_move(self, from_square: Square, to_square: Square) -> None:
        """Relocate whatever stands on from_square, overwriting to_square (that is how a capture happens). No rules involved."""
        piece_that_moved = self.piece(from_square)
        self.remove_piece(from_square)
        self.place_piece(piece_that_moved, to_square)

    def flip_side_to_move(self) -> None:
        self.side_to_move = self.side_to_move.opponent

    # --- MOVEMENT / ATTACKS ---
    def candidate_moves(self, square: Square) -> list[Move]:
        """
        Before knowing the set of legal moves, we use raycasting to find candidate moves, which will later be tested for legality
        (making sure it does not put yourself in check.)

        ---
        NOTE: En passant and castling depend on the game state and are added by the legality engine.
        """
        piece = self.piece(square)
        if piece.is_empty:
            return []
        movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece.type]
        return movement_rule(square, self)

    def is_square_attacked(self, square: Square, by_color: Color) -> bool:
        """
        Could any piece of `by_color` take on this square (pseudo-legally)?

        NOTE: Deliberately ignores whether the attacker is pinned. Otherwise checking castling safety would recurse into legality.
        """
        self._assert_on_board(square)
        return any(
            is_attacked(square, by_color, self) for is_attacked in ATTACK_RULES.values()
        )

    def is_any_under_attack(self, squares: Iterable[Square], by_color: Color) -> bool:
        return any(self.is_square_attacked(square, by_color) for square in squares)

    def is_check(self, color: Color) -> bool:
        """Is the king of this color attacked? No king, no check."""
        king_square = self.locate_king(color)
        if king_square is None:
            return False
        return self.is_square_attacked(king_square, color.opponent)

    # -- HELPERS --
    @staticmethod
    def _assert_on_board(square: Square) -> None:
        if not square.is_within_bounds():
            raise OutOfRangeError(f"Square {square} does not lie on the board.")
