"""
Custom exceptions, shared across layers.

Everything the engine raises on purpose derives from GameError, so a caller (the presentation layer, or the service)
can catch a single base class and re-prompt the user.
"""


class GameError(Exception):
    """Base class of all errors raised by the chess engine."""


class OutOfRangeError(GameError):
    """A square that does not lie on the board was handed to the engine."""


class InvalidMoveError(GameError):
    """The requested move is not one of the legal moves in the current position."""


class NotYourTurnError(InvalidMoveError):
    """Trying to move a piece belonging to the side that is not to move."""


class InvalidFENError(GameError):
    """Cannot set up a position from the supplied FEN string."""


class InvalidRequestError(GameError):
    """Request coming in through the boundary layer could not be interpreted."""


class SessionNotFoundError(GameError):
    """No game session stored under the requested id."""
