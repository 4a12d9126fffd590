"""Orchestration of communication from a presentation layer to the chess domain layer and the session store (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalDestinationsRequest,
    LegalDestinationsResponse,
    MoveRequest,
    NewGameRequest,
    PieceModel,
)
from src.chess.game import Game
from src.chess.moves import Move
from src.chess.pieces import PieceType as DomainPieceType
from src.chess.square import Square
from src.core.exceptions import SessionNotFoundError
from src.core.shared_types import Color, PieceType, Status
from src.db.repository import GameRepository

log = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- Presentation layer logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Open a new session, either in the standard starting position or in the requested one."""
        game = Game.from_fen(request.starting_fen) if request.starting_fen else Game()
        game_id = self.repo.create_game(game)
        log.info("Created game %s", game_id)
        return self._create_game_response(game_id, game)

    def new_game(self, request: NewGameRequest) -> GameResponse:
        """Reset an existing session to the standard starting position."""
        game = self._fetch_game(request.game_id)
        game.new_game()
        log.info("Reset game %s", request.game_id)
        return self._create_game_response(request.game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        game = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def legal_destinations(
        self, request: LegalDestinationsRequest
    ) -> LegalDestinationsResponse:
        """Squares the selected piece may move to (used for highlighting)."""
        game = self._fetch_game(request.game_id)
        destinations = game.legal_destinations(Square.from_algebraic(request.square))
        return LegalDestinationsResponse(
            game_id=request.game_id,
            square=request.square,
            destinations=sorted(square.to_algebraic() for square in destinations),
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt. An illegal move raises InvalidMoveError and leaves the game untouched."""
        game = self._fetch_game(request.game_id)
        promotion_choice = (
            DomainPieceType[request.promote_to.name] if request.promote_to else None
        )
        move = game.commit_move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
            promotion_choice,
        )

        response = self._create_game_response(request.game_id, game, move)
        log.info(
            "Game %s: played %s, status %s", request.game_id, move, response.status
        )
        return response

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game session."""
        if self.repo.delete_game(request.game_id) is None:
            raise SessionNotFoundError(f"Game with game_id={request.game_id} not found.")
        log.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _create_game_response(
        self, game_id: UUID, game: Game, last_move: Optional[Move] = None
    ) -> GameResponse:
        """Convert the domain objects into a GameResponse (for game with given ID.)"""
        game_status = game.status()
        en_passant_target = game.state.en_passant_target
        return GameResponse(
            game_id=game_id,
            pieces={
                square.to_algebraic(): PieceModel(
                    type=PieceType[piece.type.name], color=Color[piece.color.name]
                )
                for square, piece in game.board.position.items()
                if not piece.is_empty
            },
            side_to_move=Color[game.side_to_move().name],
            status=Status[game_status.status.name],
            status_side=Color[game_status.side.name] if game_status.side else None,
            castling_rights={
                direction.value: has_right
                for direction, has_right in game.state.castling_rights.items()
            },
            en_passant_target=en_passant_target.to_algebraic()
            if en_passant_target
            else None,
            half_move_clock=game.state.half_move_clock,
            full_move_number=game.state.full_move_number,
            last_move=str(last_move) if last_move else None,
        )

    def _fetch_game(self, game_id: UUID) -> Game:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise SessionNotFoundError(f"Game with {game_id=} not found.")
        return game
