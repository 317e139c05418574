"""
The game state and the transitions between states.

This module is the entrypoint into the domain layer for the service layer.
Every function here is pure: it takes a GameState and returns a new one (or the very same object when the action is refused).
Nothing is mutated in place and nothing is raised for an illegal action: the refusal comes back as a Rejection value.
"""

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Mapping, Optional, Self

from src.core.exceptions import GameStateError
from src.core.models import GameModel
from src.core.shared_types import Orientation, Rejection, Side, Status
from src.quoridor.geometry import (
    GOAL_ROW,
    START_POSITION,
    Position,
    Wall,
    in_bounds,
)
from src.quoridor.moves import legal_moves
from src.quoridor.walls import wall_rejection

WALLS_PER_PLAYER = 10

DEFAULT_NAMES: dict[Side, str] = {Side.FIRST: "Red", Side.SECOND: "Green"}


@dataclass(frozen=True)
class PlayerState:
    id: str
    name: str
    position: Position
    walls_left: int = WALLS_PER_PLAYER


@dataclass(frozen=True)
class GameState:
    status: Status
    turn: Side
    winner: Optional[Side]
    players: Mapping[Side, PlayerState]
    walls: tuple[Wall, ...] = ()

    def __post_init__(self) -> None:
        # read-only copy, so a snapshot cannot be changed through its players
        object.__setattr__(self, "players", MappingProxyType(dict(self.players)))

    def __hash__(self) -> int:
        return hash(
            (self.status, self.turn, self.winner, frozenset(self.players.items()), self.walls)
        )

    def player(self, side: Side) -> PlayerState:
        return self.players[side]

    def position_of(self, side: Side) -> Position:
        return self.players[side].position

    def side_of(self, player_id: str) -> Optional[Side]:
        """Which side the identity token plays. Empty tokens (open seat) never match."""
        if not player_id:
            return None
        return next(
            (side for side, player in self.players.items() if player.id == player_id),
            None,
        )

    def register_player(self, player_id: str, name: str) -> Self:
        """The second player takes the open seat and the game starts."""
        if self.status != Status.WAITING:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )
        if self.players[Side.SECOND].id:
            raise GameStateError("Cannot join this game. Room already full.")

        seated = replace(self.players[Side.SECOND], id=player_id, name=name)
        return replace(
            self,
            status=Status.PLAYING,
            players={**self.players, Side.SECOND: seated},
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a GameState from the information the Service layer actually has"""
        try:
            status = Status(model.status)
            turn = Side(model.turn)
            winner = Side(model.winner) if model.winner else None
            players = {
                Side(side_name): PlayerState(
                    id=str(record["id"]),
                    name=str(record["name"]),
                    position=Position(int(record["row"]), int(record["col"])),
                    walls_left=int(record["walls"]),
                )
                for side_name, record in model.players.items()
            }
            walls = tuple(
                Wall(int(w["row"]), int(w["col"]), Orientation(w["dir"]))
                for w in model.walls
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise GameStateError(f"Cannot restore game from stored data: {exc}") from exc

        if set(players) != set(Side):
            raise GameStateError(
                f"A game needs exactly the players {','.join(Side)}. Got: {','.join(players)}"
            )
        return cls(status, turn, winner, players, walls)

    def to_model(self, actions: Optional[list[str]] = None) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            status=self.status.value,
            turn=self.turn.value,
            winner=self.winner.value if self.winner else None,
            players={
                side.value: {
                    "id": player.id,
                    "name": player.name,
                    "row": player.position.row,
                    "col": player.position.col,
                    "walls": player.walls_left,
                }
                for side, player in self.players.items()
            },
            walls=[
                {"row": w.row, "col": w.col, "dir": w.orientation.value}
                for w in self.walls
            ],
            actions=list(actions) if actions else [],
        )


@dataclass(frozen=True)
class PawnMove:
    side: Side
    to: Position

    def to_notation(self) -> str:
        return self.to.to_notation()


@dataclass(frozen=True)
class WallPlacement:
    side: Side
    wall: Wall

    def to_notation(self) -> str:
        return self.wall.to_notation()


Action = PawnMove | WallPlacement


@dataclass(frozen=True)
class Transition:
    """Outcome of an action: the next state, or the unchanged state plus the reason it was refused."""

    state: GameState
    rejection: Optional[Rejection] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


def new_game(
    first_id: str = "",
    first_name: str = "",
    second_id: str = "",
    second_name: str = "",
    status: Status = Status.PLAYING,
) -> GameState:
    """Both pawns on their start cell, 10 walls each, no walls on the board. FIRST opens."""
    ids = {Side.FIRST: first_id, Side.SECOND: second_id}
    names = {Side.FIRST: first_name, Side.SECOND: second_name}
    players = {
        side: PlayerState(
            id=ids[side],
            name=names[side] or DEFAULT_NAMES[side],
            position=Position(*START_POSITION[side]),
        )
        for side in Side
    }
    return GameState(status=status, turn=Side.FIRST, winner=None, players=players)


def winner_of(state: GameState) -> Optional[Side]:
    for side in Side:
        if state.position_of(side).row == GOAL_ROW[side]:
            return side
    return None


def apply_move(state: GameState, side: Side, destination: Position) -> Transition:
    """
    Move the pawn of `side` to `destination`
    ----

    1. game must be in progress and it must be your turn
    2. destination must be one of the legal moves
    3. update the pawn, hand the turn to the opponent
    4. pawn on its goal row? --> game over
    """
    rejection = _turn_rejection(state, side)
    if rejection is not None:
        return Transition(state, rejection)
    if not in_bounds(destination):
        return Transition(state, Rejection.OUT_OF_BOUNDS)
    if destination not in legal_moves(state, side):
        return Transition(state, Rejection.ILLEGAL_MOVE)

    moved = replace(state.players[side], position=destination)
    next_state = replace(
        state,
        turn=side.opponent,
        players={**state.players, side: moved},
    )

    winner = winner_of(next_state)
    if winner is not None:
        next_state = replace(next_state, status=Status.FINISHED, winner=winner)
    return Transition(next_state)


def apply_wall(state: GameState, side: Side, wall: Wall) -> Transition:
    """Place a wall for `side`: costs one of its walls and passes the turn. Never ends the game."""
    rejection = _turn_rejection(state, side)
    if rejection is not None:
        return Transition(state, rejection)
    if state.players[side].walls_left <= 0:
        return Transition(state, Rejection.NO_WALLS_LEFT)

    rejection = wall_rejection(state, wall)
    if rejection is not None:
        return Transition(state, rejection)

    player = state.players[side]
    spent = replace(player, walls_left=player.walls_left - 1)
    next_state = replace(
        state,
        turn=side.opponent,
        walls=(*state.walls, wall),
        players={**state.players, side: spent},
    )
    return Transition(next_state)


def apply_action(state: GameState, action: Action) -> Transition:
    """Convenience for callers that receive either kind of action"""
    if isinstance(action, PawnMove):
        return apply_move(state, action.side, action.to)
    return apply_wall(state, action.side, action.wall)


def _turn_rejection(state: GameState, side: Side) -> Optional[Rejection]:
    if state.status != Status.PLAYING:
        return Rejection.GAME_NOT_PLAYING
    if side != state.turn:
        return Rejection.NOT_YOUR_TURN
    return None
