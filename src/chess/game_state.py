"""
Companion state of a position that cannot be read off the piece placement alone.

* castling rights: one per side per rook. True only as long as king and rook are known to never have moved.
* the en passant target square: only valid for the single move following a pawn's double step.
* move counters: half moves since the last pawn move or capture, and the full move number.

Only the commit step of the legality engine writes to it.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.castling import CastlingDirection, RookSide, castling_directions
from src.chess.pieces import Color
from src.chess.square import Square


def all_castling_rights() -> dict[CastlingDirection, bool]:
    return {direction: True for direction in CastlingDirection}


@dataclass
class GameState:
    castling_rights: dict[CastlingDirection, bool] = field(
        default_factory=all_castling_rights
    )
    en_passant_target: Optional[Square] = None
    half_move_clock: int = 0
    full_move_number: int = 1

    @classmethod
    def initial(cls) -> Self:
        return cls()

    def copy(self) -> Self:
        return type(self)(
            castling_rights=dict(self.castling_rights),
            en_passant_target=self.en_passant_target,
            half_move_clock=self.half_move_clock,
            full_move_number=self.full_move_number,
        )

    # --- READ ACCESSORS ---
    def has_castling_right(self, color: Color, rook_side: RookSide) -> bool:
        return self.castling_rights[CastlingDirection.of(color, rook_side)]

    def castling_options(self, color: Color) -> list[CastlingDirection]:
        """The directions this color may still (in principle) castle in."""
        return [
            direction
            for direction in castling_directions(color)
            if self.castling_rights[direction]
        ]

    def can_castle(self, color: Color) -> bool:
        return bool(self.castling_options(color))

    # --- MUTATORS (commit step only) ---
    def revoke_castling_rights(self, color: Color, rook_side: RookSide) -> None:
        """A right, once revoked, never comes back: there is no method to grant one."""
        self.castling_rights[CastlingDirection.of(color, rook_side)] = False

    def revoke_all_castling_rights(self, color: Color) -> None:
        for rook_side in RookSide:
            self.revoke_castling_rights(color, rook_side)

    def set_en_passant_target(self, square: Optional[Square]) -> None:
        self.en_passant_target = square

    def increment_half_move_clock(self) -> None:
        self.half_move_clock += 1

    def reset_half_move_clock(self) -> None:
        self.half_move_clock = 0

    def increment_full_move_number(self) -> None:
        self.full_move_number += 1
