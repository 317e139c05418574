"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Orientation, Rejection, Side, Status
from src.quoridor.geometry import BOARD_SIZE

SideName = str


# --- REQUEST MODELS ---
class CreateRoomRequest(BaseModel):
    player_name: str = ""


class JoinRoomRequest(BaseModel):
    game_id: UUID
    player_name: str = ""


class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    player_id: str


class MoveRequest(BaseModel):
    game_id: UUID
    player_id: str
    row: int
    col: int

    @field_validator(*["row", "col"])
    @classmethod
    def validate_cell(cls, value: int) -> int:
        if not 0 <= value < BOARD_SIZE:
            raise InvalidRequestError(
                f"Cell coordinate {value} is off the board (0-{BOARD_SIZE - 1})."
            )
        return value


class WallRequest(BaseModel):
    """
    NOTE: coordinates are only checked for being sensible integers here.
    Whether the wall fits on the board is a rule of the game, and gets reported as a rejection.
    """

    game_id: UUID
    player_id: str
    row: int
    col: int
    orientation: Orientation


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PositionResponse(BaseModel):
    row: int
    col: int


class WallResponse(BaseModel):
    row: int
    col: int
    orientation: Orientation


class PlayerResponse(BaseModel):
    name: str
    position: PositionResponse
    walls_left: int
    distance_to_goal: Optional[int]


class GameResponse(BaseModel):
    game_id: UUID
    status: Status
    turn: Side
    winner: Optional[Side]
    players: dict[SideName, PlayerResponse]
    walls: list[WallResponse]
    action_history: list[str]


class JoinResponse(BaseModel):
    """Only the player themselves gets to see their identity token"""

    player_id: str
    side: Side
    game: GameResponse


class ActionResponse(BaseModel):
    accepted: bool
    reason: Optional[Rejection]
    game: GameResponse


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_id: str
    side: Side
    legal_moves: list[PositionResponse]


class WallCheckResponse(BaseModel):
    game_id: UUID
    player_id: str
    wall: WallResponse
    legal: bool
    reason: Optional[Rejection]
