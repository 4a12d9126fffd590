"""Protocol repository: where the service keeps its game sessions"""

from typing import Protocol
from uuid import UUID

from src.chess.game import Game


class GameRepository(Protocol):
    """Session storage orchestration"""

    def get_game(self, game_id: UUID) -> Game | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: Game) -> UUID:
        """Store new game and return the newly created game ID."""
        ...

    def delete_game(self, game_id: UUID) -> Game | None:
        """Remove a game's record."""
        ...
