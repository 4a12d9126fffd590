"""
Move legality engine
----

Turns the pseudo-legal candidate moves of moves.py into legal moves, and commits a legal move to the board.

**Legal = pseudo-legal + does not leave your own king attacked.**
Every candidate is played out on a copy of the Board and GameState; if the mover's king is attacked on that copy, the
candidate is dropped. This single filter takes care of pins, discovered checks and walking into check.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from src.chess.board import Board
from src.chess.castling import CASTLING_RULES, CastlingDirection
from src.chess.game_state import GameState
from src.chess.moves import (
    Move,
    candidate_castling_move,
    en_passant_captured_square,
    en_passant_moves,
    is_pawn_move_to_promotion_square,
    pawn_direction,
)
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import InvalidMoveError, NotYourTurnError

log = logging.getLogger(__name__)

# Pawns reaching the last rank always become a queen. There is no underpromotion.
AUTO_PROMOTION = PieceType.QUEEN


@dataclass
class MoveLegalityEngine:
    board: Board
    state: GameState

    # --- QUERIES ---
    def legal_moves(self, from_square: Square) -> list[Move]:
        """
        List of legal moves for the piece standing on from_square
        ----

        **Combines the following**

        1. generate candidate moves, using the basic movement rules of the piece (the board does this calculation)
        2. add candidate castling moves (king only)
        3. add candidate en passant moves (pawn only)
        4. remove illegal options --> a move that would put you in check or you are in check and the move does not get you out of it.
        5. mark pawn moves to the last rank as promotions

        Empty square, or a piece of the side not to move? No legal moves.
        """
        piece = self.board.piece(from_square)
        if piece.is_empty or piece.color != self.board.side_to_move:
            return []

        candidate_moves = self.board.candidate_moves(from_square)

        if piece.type == PieceType.KING:
            candidate_moves.extend(
                candidate_castling_move(direction)
                for direction in self._legal_castling_directions(piece.color)
                if CASTLING_RULES[direction].king_from == from_square
            )

        if piece.type == PieceType.PAWN and self.state.en_passant_target is not None:
            candidate_moves.extend(
                move
                for move in en_passant_moves(
                    self.state.en_passant_target, piece.color, self.board
                )
                if move.from_square == from_square
            )

        return [
            move.with_promotion(AUTO_PROMOTION)
            if is_pawn_move_to_promotion_square(move, self.board)
            else move
            for move in candidate_moves
            if not self._is_putting_yourself_in_check(move)
        ]

    def legal_destinations(self, from_square: Square) -> set[Square]:
        return {move.to_square for move in self.legal_moves(from_square)}

    def is_move_legal(self, from_square: Square, to_square: Square) -> bool:
        return to_square in self.legal_destinations(from_square)

    def iter_legal_moves(self) -> Iterator[Move]:
        """All legal moves of the side to move, generated lazily (so callers can stop at the first one)."""
        for square in self.board.locate_color(self.board.side_to_move):
            yield from self.legal_moves(square)

    def has_any_legal_move(self) -> bool:
        return next(self.iter_legal_moves(), None) is not None

    # --- COMMAND ---
    def commit_move(
        self,
        from_square: Square,
        to_square: Square,
        promotion_choice: Optional[PieceType] = None,
    ) -> Move:
        """
        Play a legal move on the board
        -----

        Nothing gets mutated unless the move is legal: all checks happen before the first write.

        `promotion_choice` is accepted but pawns always promote to a queen.
        """
        piece = self.board.piece(from_square)
        self.board.piece(to_square)  # out-of-range target raises here
        if piece.is_empty:
            raise InvalidMoveError(f"No piece to move on {from_square.to_algebraic()}")
        if piece.color != self.board.side_to_move:
            raise NotYourTurnError(
                f"It is {self.board.side_to_move.name.lower()}'s turn, cannot move the piece on {from_square.to_algebraic()}."
            )

        move = next(
            (m for m in self.legal_moves(from_square) if m.to_square == to_square),
            None,
        )
        if move is None:
            log.debug(
                "Rejected move %s-%s",
                from_square.to_algebraic(),
                to_square.to_algebraic(),
            )
            raise InvalidMoveError(
                f"Move not allowed: {from_square.to_algebraic()}-{to_square.to_algebraic()}"
            )

        if move.promote_to is not None and promotion_choice not in (
            None,
            AUTO_PROMOTION,
        ):
            log.debug(
                "Promotion choice %s ignored, promoting to %s",
                promotion_choice,
                AUTO_PROMOTION,
            )

        apply_move(self.board, self.state, move)
        return move

    # -- LEGAL MOVES HELPERS ---
    def _is_putting_yourself_in_check(self, move: Move) -> bool:
        """Return True if the move puts (or leaves) you in check

        plan:
        1. Copy the board and the state
        2. make the candidate move on the copies
        3. determine if king is in check on the new board
        """
        board = self.board.copy()
        state = self.state.copy()
        player_color = board.side_to_move
        apply_move(board, state, move)
        return board.is_check(player_color)

    # -- CASTLING RULE HELPERS ---
    def _legal_castling_directions(self, color: Color) -> list[CastlingDirection]:
        """
        Find the legal castling directions for the given color
        ---

        **you are allowed to castle if**

        * You are not currently in check (you cannot castle out of check).
        * Castling rights are not yet revoked (and king / rook do stand on their home squares).
        * All squares in between the king and the rook are empty.
        * None of the squares the king stands on, passes or lands on is under attack.
        """
        if not self.state.can_castle(color) or self.board.is_check(color):
            return []

        opponent_color = color.opponent
        legal_directions: list[CastlingDirection] = []
        for direction in self.state.castling_options(color):
            squares = CASTLING_RULES[direction]
            if self.board.piece(squares.king_from) != Piece(PieceType.KING, color):
                continue
            if self.board.piece(squares.rook_from) != Piece(PieceType.ROOK, color):
                continue

            if self.board.is_any_occupied(squares.squares_between()):
                continue

            if self.board.is_any_under_attack(squares.king_path(), opponent_color):
                continue

            legal_directions.append(direction)

        return legal_directions


# --- APPLYING A MOVE (shared by simulation and commit) ---
def apply_move(board: Board, state: GameState, move: Move) -> None:
    """
    Update board and state for a move that is already known to be (pseudo-)legal.
    ---

    1. en passant: remove the pawn standing behind the target square
    2. relocate the moving piece
    3. promote a pawn reaching the last rank (always to a queen)
    4. castling: also relocate the rook
    5. revoke castling rights
    6. set / clear the en passant target
    7. move counters, flip the side to move
    """
    moving_piece = board.piece(move.from_square)
    captured_piece = board.piece(move.to_square)
    reaches_promotion_square = is_pawn_move_to_promotion_square(move, board)

    if move.is_en_passant:
        taken_square = en_passant_captured_square(move)
        captured_piece = board.piece(taken_square)
        board.remove_piece(taken_square)

    board.raw_move(move.from_square, move.to_square)

    if reaches_promotion_square:
        board.place_piece(moving_piece.promoted(AUTO_PROMOTION), move.to_square)

    if move.castling_direction is not None:
        squares = CASTLING_RULES[move.castling_direction]
        board.raw_move(squares.rook_from, squares.rook_to)

    _revoke_castling_rights_if_needed(state, move, moving_piece, captured_piece)

    state.set_en_passant_target(_determine_en_passant_square(move, moving_piece))

    if moving_piece.type == PieceType.PAWN or not captured_piece.is_empty:
        state.reset_half_move_clock()
    else:
        state.increment_half_move_clock()

    if moving_piece.color == Color.BLACK:
        state.increment_full_move_number()

    board.flip_side_to_move()


def _revoke_castling_rights_if_needed(
    state: GameState, move: Move, moving_piece: Piece, captured_piece: Piece
) -> None:
    """
    Checks which rights should get revoked
    ----

    1. If you are moving your king (castling included) --> revoke both
    2. If you are moving your rook from its home square --> revoke the right on that side
    3. If you are taking your opponent's rook on its home square --> revoke your opponent's right on that side
    """
    player_color = moving_piece.color
    opponent_color = player_color.opponent

    if moving_piece.type == PieceType.KING:
        state.revoke_all_castling_rights(player_color)

    if moving_piece.type == PieceType.ROOK:
        for direction in state.castling_options(player_color):
            if move.from_square == CASTLING_RULES[direction].rook_from:
                state.revoke_castling_rights(player_color, direction.rook_side)

    if captured_piece == Piece(PieceType.ROOK, opponent_color):
        for direction in state.castling_options(opponent_color):
            if move.to_square == CASTLING_RULES[direction].rook_from:
                state.revoke_castling_rights(opponent_color, direction.rook_side)


def _determine_en_passant_square(move: Move, moving_piece: Piece) -> Optional[Square]:
    """The possible en passant square for the next turn: the square a pawn passed over with its double step."""
    ranks_moved = abs(move.to_square.rank - move.from_square.rank)
    if moving_piece.type == PieceType.PAWN and ranks_moved == 2:
        return move.from_square.offset(pawn_direction(moving_piece.color), 0)
    return None
