"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest

from src.chess.game import Game
from src.chess.square import Square
from src.db.memory_repository import InMemoryGameRepository

EMPTY_POSITION = "/".join(["8"] * 8)

PlayMovesFn = Callable[[Game, list[tuple[str, str]]], Game]


@pytest.fixture
def game() -> Game:
    """A fresh game in the standard starting position."""
    return Game()


@pytest.fixture
def play_moves() -> PlayMovesFn:
    """Call the inner function with a game and a list of (from, to) square names to commit them in order."""

    def _play(game: Game, moves: list[tuple[str, str]]) -> Game:
        for from_name, to_name in moves:
            game.commit_move(Square.from_algebraic(from_name), Square.from_algebraic(to_name))
        return game

    return _play


@pytest.fixture
def repository() -> Generator[InMemoryGameRepository, None, None]:
    """Session store, emptied between tests"""
    repo = InMemoryGameRepository()
    try:
        yield repo
    finally:
        repo.clear()
