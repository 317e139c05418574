"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from src.core.config import ROOM_TTL_SECONDS
from src.core.exceptions import ConcurrentUpdateError
from src.core.models import GameModel
from src.db.schema import DBGame, expiry_from_now, utc_now

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session, ttl_seconds: int = ROOM_TTL_SECONDS) -> None:
        self.db = db_session
        self.ttl_seconds = ttl_seconds

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists and has not expired."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            status=game.status,
            turn=game.turn,
            winner=game.winner,
            players=game.players,
            walls=game.walls,
            actions=game.actions,
            version=0,
            expires_at=expiry_from_now(self.ttl_seconds),
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        logger.debug("Stored new game %s", new_id)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """
        Compare-and-set: only overwrite the record if it is still at the version the caller loaded.
        Every successful write bumps the version and pushes the expiry forward.
        """
        if not self._fetch_game(game_id):
            return None

        statement = (
            update(DBGame)
            .where(DBGame.id == game_id, DBGame.version == game.version)
            .values(
                status=game.status,
                turn=game.turn,
                winner=game.winner,
                players=game.players,
                walls=game.walls,
                actions=game.actions,
                version=game.version + 1,
                updated_at=utc_now(),
                expires_at=expiry_from_now(self.ttl_seconds),
            )
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(statement)
        if result.rowcount == 0:
            self.db.rollback()
            logger.warning(
                "Rejected stale write to game %s (loaded at version %d)",
                game_id,
                game.version,
            )
            raise ConcurrentUpdateError(
                f"Game {game_id} was changed by someone else. Reload and try again."
            )
        self.db.commit()

        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        """Expired records are treated as if they do not exist."""
        query = select(DBGame).where(DBGame.id == game_id, DBGame.expires_at > utc_now())
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            status=game_db.status,
            turn=game_db.turn,
            winner=game_db.winner,
            players=game_db.players,
            walls=game_db.walls,
            actions=game_db.actions,
            version=game_db.version,
        )
