"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Callable
from uuid import UUID, uuid4

from src.api.models import (
    ActionResponse,
    CreateRoomRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    JoinResponse,
    JoinRoomRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    PlayerResponse,
    PositionResponse,
    WallCheckResponse,
    WallRequest,
    WallResponse,
)
from src.core.exceptions import RepositoryError, UnknownPlayerError
from src.core.models import GameModel
from src.core.shared_types import Side, Status
from src.db.repository import GameRepository
from src.quoridor.game import (
    Action,
    GameState,
    PawnMove,
    WallPlacement,
    apply_action,
    new_game,
)
from src.quoridor.geometry import GOAL_ROW, Position, Wall
from src.quoridor.moves import legal_moves
from src.quoridor.walls import shortest_path_length, wall_rejection

logger = logging.getLogger(__name__)

GUEST_NAME = "Guest"


class QuoridorService:
    """Orchestration of layers for a Quoridor room."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_room(self, request: CreateRoomRequest) -> JoinResponse:
        """First player opens a room and waits for an opponent. The host always plays FIRST."""
        player_id = str(uuid4())
        game = new_game(
            first_id=player_id, first_name=request.player_name, status=Status.WAITING
        )

        stored_game, game_id = self.repo.create_game(game.to_model())
        logger.info("Created game %s hosted by %r", game_id, game.player(Side.FIRST).name)

        return JoinResponse(
            player_id=player_id,
            side=Side.FIRST,
            game=self._create_game_response(game_id, stored_game),
        )

    def join_room(self, request: JoinRoomRequest) -> JoinResponse:
        """Second player takes the open seat. This starts the game."""

        # Retrieve persisted GameModel from repository
        stored_model = self._fetch_game(request.game_id)
        game = GameState.from_model(stored_model)

        # Register the requested player (raises if the room is not open any more)
        player_id = str(uuid4())
        joined = game.register_player(player_id, request.player_name or GUEST_NAME)

        with_player_registered = joined.to_model(stored_model.actions)
        with_player_registered.version = stored_model.version
        updated = self._store(request.game_id, with_player_registered)
        logger.info("Player %r joined game %s", request.player_name, request.game_id)

        return JoinResponse(
            player_id=player_id,
            side=Side.SECOND,
            game=self._create_game_response(request.game_id, updated),
        )

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Destinations for the player's pawn. Also answered when it is not their turn (to preview)."""
        stored_model = self._fetch_game(request.game_id)
        game = GameState.from_model(stored_model)
        side = self._side_of(game, request.player_id)

        destinations = sorted(legal_moves(game, side), key=lambda p: (p.row, p.col))
        return LegalMovesResponse(
            game_id=request.game_id,
            player_id=request.player_id,
            side=side,
            legal_moves=[PositionResponse(row=p.row, col=p.col) for p in destinations],
        )

    def check_wall(self, request: WallRequest) -> WallCheckResponse:
        """
        Would this wall fit right now? Nothing is stored.
        ----
        Frontend asks this for the wall under the cursor. Like legal_moves it ignores turn and wall count.
        """
        stored_model = self._fetch_game(request.game_id)
        game = GameState.from_model(stored_model)
        self._side_of(game, request.player_id)

        wall = Wall(request.row, request.col, request.orientation)
        reason = wall_rejection(game, wall)
        return WallCheckResponse(
            game_id=request.game_id,
            player_id=request.player_id,
            wall=WallResponse(row=wall.row, col=wall.col, orientation=wall.orientation),
            legal=reason is None,
            reason=reason,
        )

    def make_move(self, request: MoveRequest) -> ActionResponse:
        """Pawn move attempt."""
        return self._play(
            request.game_id,
            request.player_id,
            lambda side: PawnMove(side, Position(request.row, request.col)),
        )

    def place_wall(self, request: WallRequest) -> ActionResponse:
        """Wall placement attempt."""
        return self._play(
            request.game_id,
            request.player_id,
            lambda side: WallPlacement(
                side, Wall(request.row, request.col, request.orientation)
            ),
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _play(
        self, game_id: UUID, player_id: str, build_action: Callable[[Side], Action]
    ) -> ActionResponse:
        """
        Read - apply - write
        ----

        1. load the latest snapshot
        2. let the engine apply the action
        3. refused? report why and store nothing
        4. accepted? write back, guarded by the version that was loaded (a concurrent write makes this raise)
        """
        stored_model = self._fetch_game(game_id)
        game = GameState.from_model(stored_model)
        side = self._side_of(game, player_id)
        action: Action = build_action(side)

        transition = apply_action(game, action)
        if not transition.accepted:
            logger.warning(
                "Game %s: %s tried %r, rejected (%s)",
                game_id,
                side,
                action,
                transition.rejection,
            )
            return ActionResponse(
                accepted=False,
                reason=transition.rejection,
                game=self._create_game_response(game_id, stored_model),
            )

        after_action = transition.state.to_model(
            [*stored_model.actions, action.to_notation()]
        )
        after_action.version = stored_model.version
        updated = self._store(game_id, after_action)

        if transition.state.status == Status.FINISHED:
            logger.info("Game %s won by %s", game_id, transition.state.winner)
        return ActionResponse(
            accepted=True,
            reason=None,
            game=self._create_game_response(game_id, updated),
        )

    def _side_of(self, game: GameState, player_id: str) -> Side:
        side = game.side_of(player_id)
        if side is None:
            raise UnknownPlayerError(f"Player {player_id!r} does not play in this game.")
        return side

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        game = GameState.from_model(model)
        return GameResponse(
            game_id=game_id,
            status=game.status,
            turn=game.turn,
            winner=game.winner,
            players={
                side.value: PlayerResponse(
                    name=player.name,
                    position=PositionResponse(
                        row=player.position.row, col=player.position.col
                    ),
                    walls_left=player.walls_left,
                    distance_to_goal=shortest_path_length(
                        player.position, GOAL_ROW[side], game.walls
                    ),
                )
                for side, player in game.players.items()
            },
            walls=[
                WallResponse(row=w.row, col=w.col, orientation=w.orientation)
                for w in game.walls
            ],
            action_history=model.actions,
        )

    def _store(self, game_id: UUID, model: GameModel) -> GameModel:
        updated = self.repo.update_game(game_id, model)
        if updated is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return updated

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
