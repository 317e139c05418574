"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class Side(StrEnum):
    """FIRST starts on the top row and races to row 8, SECOND starts on the bottom row and races to row 0."""

    FIRST = "player1"
    SECOND = "player2"

    @property
    def opponent(self) -> "Side":
        return Side.SECOND if self == Side.FIRST else Side.FIRST


class Orientation(StrEnum):
    HORIZONTAL = "h"
    VERTICAL = "v"


class Rejection(StrEnum):
    """Why the engine refused an action. The engine returns these, it never raises them."""

    OUT_OF_BOUNDS = "out of bounds"
    OVERLAP = "overlaps an existing wall"
    DISCONNECTS = "would cut a pawn off from its goal"
    NOT_YOUR_TURN = "not your turn"
    NO_WALLS_LEFT = "no walls left"
    GAME_NOT_PLAYING = "game is not being played"
    ILLEGAL_MOVE = "illegal move"
