"""Implementation of (Game)Repository that simply keeps the sessions in memory. Nothing is persisted."""

from uuid import UUID, uuid4

from src.chess.game import Game


class InMemoryGameRepository:
    """Games stored in a dictionary keyed by their ID"""

    def __init__(self) -> None:
        self._games: dict[UUID, Game] = {}

    def get_game(self, game_id: UUID) -> Game | None:
        return self._games.get(game_id)

    def create_game(self, game: Game) -> UUID:
        new_id = uuid4()
        self._games[new_id] = game
        return new_id

    def delete_game(self, game_id: UUID) -> Game | None:
        return self._games.pop(game_id, None)

    def clear(self) -> None:
        self._games.clear()

    def __len__(self) -> int:
        return len(self._games)
