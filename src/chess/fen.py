"""
Setting up a position from a FEN string.
----

<piece placement> <side to move> <castling rights> <en passant target> <half move clock> <full move number>

ex) rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1

The piece placement is handed to Board.from_fen, the other five fields end up in a GameState.
Every problem with the string surfaces as InvalidFENError. The engine never writes FEN.
"""

import re
from string import digits
from typing import Optional

from src.chess.board import STARTING_POSITION_FEN, Board
from src.chess.castling import CastlingDirection
from src.chess.game_state import GameState
from src.chess.pieces import Color
from src.chess.square import Square, is_square_name
from src.core.exceptions import InvalidFENError

STARTING_FEN = f"{STARTING_POSITION_FEN} w KQkq - 0 1"
NUM_FEN_FIELDS = 6

SIDE_TO_MOVE_CODES = {"w": Color.WHITE, "b": Color.BLACK}

# Letters must appear in this order, each at most once. A lone "-" means no rights at all.
CASTLING_FIELD_PATTERN = re.compile(r"K?Q?k?q?")

# The target lies behind the pawn that just double-stepped: on the 6th rank when White is to move, 3rd for Black.
EN_PASSANT_RANK_NAMES = {Color.WHITE: "6", Color.BLACK: "3"}


def parse_fen(fen: str) -> tuple[Board, GameState]:
    """The two pieces of state a game session owns, built from a full FEN string."""
    fields = fen.strip().split()
    if len(fields) != NUM_FEN_FIELDS:
        raise InvalidFENError(
            f"Expected {NUM_FEN_FIELDS} space-separated fields, got {len(fields)}: {fen!r}"
        )
    placement, side_field, castling_field, en_passant_field, half_moves, full_moves = fields

    side_to_move = parse_side_to_move(side_field)
    board = Board.from_fen(placement, side_to_move=side_to_move)
    state = GameState(
        castling_rights=parse_castling_rights(castling_field),
        en_passant_target=parse_en_passant_target(en_passant_field, side_to_move),
        half_move_clock=parse_counter(half_moves, minimum=0),
        full_move_number=parse_counter(full_moves, minimum=1),
    )
    return board, state


def is_valid_fen(fen: str) -> bool:
    try:
        parse_fen(fen)
    except InvalidFENError:
        return False
    return True


# --- FIELD PARSERS ---
def parse_side_to_move(field: str) -> Color:
    try:
        return SIDE_TO_MOVE_CODES[field]
    except KeyError as e:
        raise InvalidFENError(f"Side to move must be 'w' or 'b', got {field!r}") from e


def parse_castling_rights(field: str) -> dict[CastlingDirection, bool]:
    """'KQkq', 'Kq', ... or '-'. The letters are the values of CastlingDirection."""
    if field == "-":
        return {direction: False for direction in CastlingDirection}
    if not field or CASTLING_FIELD_PATTERN.fullmatch(field) is None:
        raise InvalidFENError(f"Cannot interpret castling rights {field!r}")
    return {direction: direction.value in field for direction in CastlingDirection}


def parse_en_passant_target(field: str, side_to_move: Color) -> Optional[Square]:
    if field == "-":
        return None
    if not is_square_name(field):
        raise InvalidFENError(f"En passant target {field!r} is not a square of the board")
    if field[1] != EN_PASSANT_RANK_NAMES[side_to_move]:
        raise InvalidFENError(
            f"En passant target {field!r} does not fit {side_to_move.name.lower()} to move"
        )
    return Square.from_algebraic(field)


def parse_counter(field: str, minimum: int) -> int:
    # plain ASCII digits only, no sign
    if not field or any(character not in digits for character in field):
        raise InvalidFENError(f"Move counter must be a non-negative number, got {field!r}")
    value = int(field)
    if value < minimum:
        raise InvalidFENError(f"Move counter {value} is below {minimum}")
    return value
