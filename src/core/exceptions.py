"""
Exceptions raised by the layers around the rules engine.

The engine itself (src/quoridor/moves.py, walls.py, game.py) never raises: a refused action is reported as a value.
"""


class GameError(Exception):
    """Base class. The service layer (and anything wrapping it) can catch this single type."""


class GameStateError(GameError):
    """A stored/requested game is in a state that does not allow the operation (joining a full room, bad status text, ...)"""


class NotationError(GameError):
    """Text could not be parsed as a square or wall."""


class UnknownPlayerError(GameError):
    """The identity token does not belong to either player of the game."""


class InvalidRequestError(GameError):
    """Raised from request model validators. NOTE: deliberately not a ValueError, so pydantic does not wrap it."""


class RepositoryError(GameError):
    """Persistence layer could not find / store a record."""


class ConcurrentUpdateError(RepositoryError):
    """Someone else wrote a newer version of the game since it was loaded."""
