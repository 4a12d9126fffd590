"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the pseudo-legal move sets for each piece type.


Legality (not leaving your own king in check) is checked later by the legality engine
"""

from dataclasses import dataclass, replace
from typing import Callable, Optional, Protocol, Self

from src.chess.castling import CASTLING_RULES, CastlingDirection
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Piece: ...


# (delta rank, delta file)
Vector = tuple[int, int]

STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square
    promote_to: Optional[PieceType] = None
    castling_direction: Optional[CastlingDirection] = None
    is_en_passant: bool = False

    def with_promotion(self, piece_type: PieceType) -> Self:
        return replace(self, promote_to=piece_type)

    def __str__(self) -> str:
        return f"{self.from_square.to_algebraic()}-{self.to_square.to_algebraic()}"


def pawn_direction(color: Color) -> int:
    """White moves UP the board, black moves DOWN"""
    return 1 if color == Color.WHITE else -1


def pawn_start_rank(color: Color) -> int:
    return 1 if color == Color.WHITE else BOARD_DIMENSIONS[0] - 2


def promotion_rank(color: Color) -> int:
    return BOARD_DIMENSIONS[0] - 1 if color == Color.WHITE else 0


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    """

    player_color = board.piece(square).color
    opponent_color = player_color.opponent

    moves: list[Move] = []
    for dr, df in directions:
        target_square = square.offset(dr, df)
        while target_square.is_within_bounds():
            piece_found = board.piece(target_square)
            if not piece_found.is_empty:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if piece_found.color == opponent_color:
                    moves.append(Move(from_square=square, to_square=target_square))
                break

            moves.append(Move(from_square=square, to_square=target_square))
            target_square = target_square.offset(dr, df)
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    player_color = board.piece(square).color
    moves: list[Move] = []
    for dr, df in deltas:
        target_square = square.offset(dr, df)
        if not target_square.is_within_bounds():
            continue

        square_available = board.piece(target_square).color != player_color
        if square_available:
            moves.append(Move(from_square=square, to_square=target_square))

    return moves


def candidate_pawn_moves(square: Square, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, only onto an empty square.
    - It can move by two in their first move (so when on their starting rank), when both squares are empty
    - takes diagonally

    NOTE: En passant is generated separately, it depends on the game state and not just the board.
    """
    player_color = board.piece(square).color
    forward = pawn_direction(player_color)
    moves: list[Move] = []

    # Pawn pushes
    one_step = square.offset(forward, 0)
    if one_step.is_within_bounds() and board.piece(one_step).is_empty:
        moves.append(Move(from_square=square, to_square=one_step))

        two_steps = one_step.offset(forward, 0)
        if square.rank == pawn_start_rank(player_color) and board.piece(
            two_steps
        ).is_empty:
            moves.append(Move(from_square=square, to_square=two_steps))

    # pawns take diagonally:
    opponent_color = player_color.opponent
    for df in (-1, 1):
        target_square = square.offset(forward, df)
        if not target_square.is_within_bounds():
            continue
        if board.piece(target_square).color == opponent_color:
            moves.append(Move(from_square=square, to_square=target_square))
    return moves


def candidate_knight_moves(square: Square, board: Board) -> list[Move]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    diagonal_moves = candidate_bishop_moves(square, board)
    horizontal_and_vertical_moves = candidate_rook_moves(square, board)
    return diagonal_moves + horizontal_and_vertical_moves


def candidate_king_moves(square: Square, board: Board) -> list[Move]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (handled separately).
    """
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


# --- CAPTURING RULES / ATTACKING RULES ---
def raycasting_attack(
    square: Square,
    by_color: Color,
    by_piece_types: tuple[PieceType, ...],
    board: Board,
    directions: list[Vector],
) -> bool:
    """
    Raycasting algorithm for attacks.
    ---

    Where `raycasting_move()` determines
    _"What is the line-of-sight of the piece standing on the specified square?"_

    This function determines:
    _"Is the specified square in the line-of-sight of a piece of the specified color and that
    is allowed to move along the given direction?"_

    ---
    Returns TRUE if the first piece encountered along a direction is of the given color and one of the given types.
    """
    for dr, df in directions:
        target_square = square.offset(dr, df)
        while target_square.is_within_bounds():
            piece_found = board.piece(target_square)
            if not piece_found.is_empty:
                if (piece_found.color == by_color) and (
                    piece_found.type in by_piece_types
                ):
                    return True
                break
            target_square = target_square.offset(dr, df)
    return False


def single_step_attack(
    square: Square,
    by_color: Color,
    by_piece_type: PieceType,
    board: Board,
    deltas: list[Vector],
) -> bool:
    """
    The equivalent of raycasting for pawns, kings, and knights: they can only attack a single step along a direction.

    ---
    Returns TRUE if the piece found is of the given color and type.
    """
    for dr, df in deltas:
        target_square = square.offset(dr, df)
        if not target_square.is_within_bounds():
            continue

        piece_found = board.piece(target_square)
        if (piece_found.color == by_color) and (piece_found.type == by_piece_type):
            return True

    return False


def is_attacked_by_pawn(square: Square, by_color: Color, board: Board) -> bool:
    """
    Pawns take diagonally
    ----

    NOTE: Pawn moves are not symmetric, so to check IF a white pawn could take on your square -->
    Must look one rank DOWN the board. That is, you are asking "Could a white pawn, that moves UP the board, take on the specified square?"

    Hence, vectors are exactly opposite to the ones used to take (see `candidate_pawn_moves()`).
    A pawn push never attacks.
    """
    backwards = -pawn_direction(by_color)
    inverse_pawn_take_deltas: list[Vector] = [(backwards, 1), (backwards, -1)]
    return single_step_attack(
        square, by_color, PieceType.PAWN, board, inverse_pawn_take_deltas
    )


def is_attacked_by_knight(square: Square, by_color: Color, board: Board) -> bool:
    return single_step_attack(square, by_color, PieceType.KNIGHT, board, KNIGHT_DELTAS)


def is_attacked_by_bishop(square: Square, by_color: Color, board: Board) -> bool:
    return raycasting_attack(square, by_color, (PieceType.BISHOP,), board, DIAGONALS)


def is_attacked_by_rook(square: Square, by_color: Color, board: Board) -> bool:
    return raycasting_attack(square, by_color, (PieceType.ROOK,), board, STRAIGHTS)


def is_attacked_by_queen(square: Square, by_color: Color, board: Board) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_attack(
        square, by_color, (PieceType.QUEEN,), board, STRAIGHTS + DIAGONALS
    )


def is_attacked_by_king(square: Square, by_color: Color, board: Board) -> bool:
    """
    The king attacks the adjacent squares only. Castling never attacks anything.
    """
    return single_step_attack(square, by_color, PieceType.KING, board, KING_DELTAS)


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Square, Color, Board], bool]
ATTACK_RULES: dict[PieceType, IsAttackedFn] = {
    PieceType.PAWN: is_attacked_by_pawn,
    PieceType.KNIGHT: is_attacked_by_knight,
    PieceType.BISHOP: is_attacked_by_bishop,
    PieceType.ROOK: is_attacked_by_rook,
    PieceType.QUEEN: is_attacked_by_queen,
    PieceType.KING: is_attacked_by_king,
}


# -- CASTLING MOVES ---
def candidate_castling_move(direction: CastlingDirection) -> Move:
    """convert the castling rule into a move of the king + the castling direction set properly"""
    rule = CASTLING_RULES[direction]
    return Move(rule.king_from, rule.king_to, castling_direction=direction)


# -- EN PASSANT MOVES ---
def en_passant_moves(
    en_passant_square: Square, color: Color, board: Board
) -> list[Move]:
    """
    Given a target en passant square, check the adjacent files (in the rank one up/down from the en passant square) for pawns of the correct color.

    NOTE: The target must be empty and the opponent's pawn that just double-stepped must stand right behind it.
    """
    backwards = -pawn_direction(color)
    captured_square = en_passant_square.offset(backwards, 0)
    if not captured_square.is_within_bounds():
        return []
    if not board.piece(en_passant_square).is_empty:
        return []
    if board.piece(captured_square) != Piece(PieceType.PAWN, color.opponent):
        return []

    own_pawn = Piece(PieceType.PAWN, color)
    moves: list[Move] = []
    for df in (-1, 1):
        maybe_pawn_square = en_passant_square.offset(backwards, df)
        if not maybe_pawn_square.is_within_bounds():
            continue
        if board.piece(maybe_pawn_square) == own_pawn:
            moves.append(
                Move(
                    from_square=maybe_pawn_square,
                    to_square=en_passant_square,
                    is_en_passant=True,
                )
            )

    return moves


def en_passant_captured_square(move: Move) -> Square:
    """The pawn taken en passant stands on the destination's file, on the rank the capturing pawn started from."""
    return Square(move.from_square.rank, move.to_square.file)


# -- PAWN PROMOTION MOVES --
def is_pawn_move_to_promotion_square(move: Move, board: Board) -> bool:
    """check if the move is a pawn move and if it reaches the final rank (seen from the pawn's side)"""
    moving_piece = board.piece(move.from_square)
    if moving_piece.type != PieceType.PAWN:
        return False
    return move.to_square.rank == promotion_rank(moving_piece.color)
