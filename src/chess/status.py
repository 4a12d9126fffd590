"""
Terminal state detection: check, checkmate, stalemate.

The status is derived from Board + GameState every time it is asked for. Nothing is cached.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.chess.board import Board
from src.chess.game_state import GameState
from src.chess.legality import MoveLegalityEngine
from src.chess.pieces import Color


class Status(Enum):
    ONGOING = auto()
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()


@dataclass(frozen=True)
class GameStatus:
    """One of Ongoing, Check(side), Checkmate(side), Stalemate. `side` is the side in (or mated by) check."""

    status: Status
    side: Optional[Color] = None

    @classmethod
    def ongoing(cls) -> Self:
        return cls(Status.ONGOING)

    @classmethod
    def check(cls, side: Color) -> Self:
        return cls(Status.CHECK, side)

    @classmethod
    def checkmate(cls, side: Color) -> Self:
        return cls(Status.CHECKMATE, side)

    @classmethod
    def stalemate(cls) -> Self:
        return cls(Status.STALEMATE)

    @property
    def is_game_over(self) -> bool:
        return self.status in (Status.CHECKMATE, Status.STALEMATE)

    @property
    def winner(self) -> Optional[Color]:
        """Only a checkmate has a winner: the opponent of the mated side."""
        if self.status != Status.CHECKMATE or self.side is None:
            return None
        return self.side.opponent


def determine_status(board: Board, state: GameState) -> GameStatus:
    """
    | in check | any legal move | status       |
    |----------|----------------|--------------|
    | yes      | yes            | Check(S)     |
    | yes      | no             | Checkmate(S) |
    | no       | yes            | Ongoing      |
    | no       | no             | Stalemate    |

    S is the side to move. No draw by repetition, fifty-move rule or insufficient material.
    """
    side = board.side_to_move
    in_check = board.is_check(side)
    has_any_legal_move = MoveLegalityEngine(board, state).has_any_legal_move()

    if in_check:
        return GameStatus.check(side) if has_any_legal_move else GameStatus.checkmate(side)
    return GameStatus.ongoing() if has_any_legal_move else GameStatus.stalemate()
