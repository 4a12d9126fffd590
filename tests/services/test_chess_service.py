"""Unit tests for src/services/chess_service.py"""

from typing import Callable
from uuid import UUID, uuid4

import pytest

from src.core.exceptions import (
    GameError,
    InvalidMoveError,
    NotYourTurnError,
    SessionNotFoundError,
)
from src.core.shared_types import Color, PieceType, Status
from src.db.memory_repository import InMemoryGameRepository
from src.services.chess_service import (
    ChessService,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalDestinationsRequest,
    LegalDestinationsResponse,
    MoveRequest,
    NewGameRequest,
)

CUSTOM_FEN = "4k3/4P3/8/8/8/8/8/4K3 w - - 0 30"


@pytest.fixture
def service(repository: InMemoryGameRepository) -> ChessService:
    return ChessService(repository)


@pytest.fixture
def game_id(service: ChessService) -> UUID:
    """ID of a freshly created game in the starting position"""
    return service.create_new_game(CreateGameRequest()).game_id


def play(service: ChessService, game_id: UUID, moves: list[tuple[str, str]]) -> GameResponse:
    response = service.get_game_state(GetGameRequest(game_id=game_id))
    for from_square, to_square in moves:
        response = service.make_move(
            MoveRequest(game_id=game_id, from_square=from_square, to_square=to_square)
        )
    return response


# --- SERVICE - CREATE NEW GAME ----
def test_create_a_new_game(service: ChessService, repository: InMemoryGameRepository) -> None:
    """Check that new game is created, stored in the repo, and the response has the appropriate information."""
    response = service.create_new_game(CreateGameRequest())

    assert isinstance(response, GameResponse)
    assert isinstance(response.game_id, UUID)
    assert len(response.pieces) == 32
    assert response.pieces["e1"].type == PieceType.KING
    assert response.pieces["e1"].color == Color.WHITE
    assert response.pieces["d8"].type == PieceType.QUEEN
    assert response.side_to_move == Color.WHITE
    assert response.status == Status.ONGOING
    assert response.status_side is None
    assert response.castling_rights == {"K": True, "Q": True, "k": True, "q": True}
    assert response.en_passant_target is None
    assert response.half_move_clock == 0
    assert response.full_move_number == 1
    assert response.last_move is None

    assert repository.get_game(response.game_id) is not None
    assert len(repository) == 1


def test_create_from_custom_fen(service: ChessService) -> None:
    response = service.create_new_game(CreateGameRequest(starting_fen=CUSTOM_FEN))
    assert set(response.pieces) == {"e8", "e7", "e1"}
    assert response.castling_rights == {"K": False, "Q": False, "k": False, "q": False}
    assert response.full_move_number == 30


def test_create_with_invalid_fen(service: ChessService, repository: InMemoryGameRepository) -> None:
    """Make sure service propagates the exceptions (and stores nothing)."""
    with pytest.raises(GameError):
        _ = service.create_new_game(CreateGameRequest(starting_fen=" ".join(["mock"] * 6)))
    assert len(repository) == 0


def test_sessions_are_independent(service: ChessService) -> None:
    first = service.create_new_game(CreateGameRequest()).game_id
    second = service.create_new_game(CreateGameRequest()).game_id
    assert first != second

    play(service, first, [("e2", "e4")])
    response = service.get_game_state(GetGameRequest(game_id=second))
    assert response.side_to_move == Color.WHITE
    assert "e2" in response.pieces


# --- SERVICE - MAKE MOVE ----
def test_make_move(service: ChessService, game_id: UUID) -> None:
    response = play(service, game_id, [("e2", "e4")])
    assert response.last_move == "e2-e4"
    assert "e2" not in response.pieces
    assert response.pieces["e4"].type == PieceType.PAWN
    assert response.side_to_move == Color.BLACK
    assert response.en_passant_target == "e3"


def test_illegal_move_leaves_game_untouched(service: ChessService, game_id: UUID) -> None:
    before = service.get_game_state(GetGameRequest(game_id=game_id))
    with pytest.raises(InvalidMoveError):
        play(service, game_id, [("e2", "e5")])
    with pytest.raises(NotYourTurnError):
        play(service, game_id, [("e7", "e5")])
    assert service.get_game_state(GetGameRequest(game_id=game_id)) == before


def test_checkmate_is_reported(service: ChessService, game_id: UUID) -> None:
    response = play(service, game_id, [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")])
    assert response.status == Status.CHECKMATE
    assert response.status_side == Color.WHITE


def test_check_is_reported(service: ChessService, game_id: UUID) -> None:
    response = play(service, game_id, [("e2", "e4"), ("f7", "f6"), ("d1", "h5")])
    assert response.status == Status.CHECK
    assert response.status_side == Color.BLACK


def test_promotion_request_always_gives_a_queen(service: ChessService) -> None:
    game_id = service.create_new_game(CreateGameRequest(starting_fen="7k/4P3/8/8/8/8/8/4K3 w - - 0 1")).game_id
    response = service.make_move(
        MoveRequest(game_id=game_id, from_square="e7", to_square="e8", promote_to=PieceType.ROOK)
    )
    assert response.pieces["e8"].type == PieceType.QUEEN
    assert response.pieces["e8"].color == Color.WHITE


# --- SERVICE - LEGAL DESTINATIONS ----
def test_legal_destinations(service: ChessService, game_id: UUID) -> None:
    response = service.legal_destinations(LegalDestinationsRequest(game_id=game_id, square="b1"))
    assert isinstance(response, LegalDestinationsResponse)
    assert response.square == "b1"
    assert response.destinations == ["a3", "c3"]


def test_legal_destinations_of_opponent_piece(service: ChessService, game_id: UUID) -> None:
    response = service.legal_destinations(LegalDestinationsRequest(game_id=game_id, square="b8"))
    assert response.destinations == []


# --- SERVICE - NEW GAME / DELETE ----
def test_new_game_resets_session(service: ChessService, game_id: UUID) -> None:
    play(service, game_id, [("e2", "e4"), ("e7", "e5")])
    response = service.new_game(NewGameRequest(game_id=game_id))
    assert response.game_id == game_id
    assert response.side_to_move == Color.WHITE
    assert response.full_move_number == 1
    assert "e2" in response.pieces and "e4" not in response.pieces


def test_delete_game(service: ChessService, repository: InMemoryGameRepository, game_id: UUID) -> None:
    service.delete_game(DeleteGameRequest(game_id=game_id))
    assert repository.get_game(game_id) is None
    with pytest.raises(SessionNotFoundError):
        service.get_game_state(GetGameRequest(game_id=game_id))


@pytest.mark.parametrize(
    "call",
    [
        lambda service, game_id: service.get_game_state(GetGameRequest(game_id=game_id)),
        lambda service, game_id: service.new_game(NewGameRequest(game_id=game_id)),
        lambda service, game_id: service.delete_game(DeleteGameRequest(game_id=game_id)),
        lambda service, game_id: service.legal_destinations(
            LegalDestinationsRequest(game_id=game_id, square="e2")
        ),
        lambda service, game_id: service.make_move(
            MoveRequest(game_id=game_id, from_square="e2", to_square="e4")
        ),
    ],
)
def test_unknown_session(
    service: ChessService, call: Callable[[ChessService, UUID], object]
) -> None:
    with pytest.raises(SessionNotFoundError):
        call(service, uuid4())
