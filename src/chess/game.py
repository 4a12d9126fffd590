"""
The Game class is the entrypoint into the domain layer.
It owns the Board and the GameState of one game, and is the only thing a presentation layer (or the service layer) talks to.

Query: piece_at, legal_destinations, is_move_legal, status, side_to_move
Command: new_game, commit_move

Every Game is an independent session: create as many as you like (e.g. one per test).
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.board import Board
from src.chess.fen import parse_fen
from src.chess.game_state import GameState
from src.chess.legality import MoveLegalityEngine
from src.chess.moves import Move
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.chess.status import GameStatus, determine_status


@dataclass
class Game:
    board: Board = field(default_factory=Board.starting_position)
    state: GameState = field(default_factory=GameState.initial)

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """Start a game from a custom position"""
        board, state = parse_fen(fen)
        return cls(board, state)

    # --- COMMANDS ---
    def new_game(self) -> None:
        """Throw away the current position and start over from the standard starting position."""
        self.board = Board.starting_position()
        self.state = GameState.initial()

    def commit_move(
        self,
        from_square: Square,
        to_square: Square,
        promotion_choice: Optional[PieceType] = None,
    ) -> Move:
        """
        Attempt to make a move
        -----

        Raises InvalidMoveError (and changes nothing) if the move is not legal.
        """
        return self._engine().commit_move(from_square, to_square, promotion_choice)

    # --- QUERIES ---
    def piece_at(self, square: Square) -> Piece:
        return self.board.piece_at(square)

    def side_to_move(self) -> Color:
        return self.board.side_to_move

    def legal_destinations(self, square: Square) -> set[Square]:
        return self._engine().legal_destinations(square)

    def is_move_legal(self, from_square: Square, to_square: Square) -> bool:
        return self._engine().is_move_legal(from_square, to_square)

    def status(self) -> GameStatus:
        return determine_status(self.board, self.state)

    # -- PRIVATE HELPERS ---
    def _engine(self) -> MoveLegalityEngine:
        """The engine works on whatever board / state this game currently owns (new_game swaps them out)."""
        return MoveLegalityEngine(self.board, self.state)
