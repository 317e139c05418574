"""Unit tests for src/db/sql_repository.py"""

from uuid import uuid4

import pytest
from sqlalchemy.orm import Session

from src.core.exceptions import ConcurrentUpdateError
from src.core.shared_types import Status
from src.db.sql_repository import GameModel, SQLGameRepository


def mock_model(**overrides) -> GameModel:
    """Some game data. The repository does not interpret it, so it does not have to be a meaningful position."""
    data = dict(
        status=Status.PLAYING.value,
        turn="player1",
        winner=None,
        players={
            "player1": {"id": "id-1", "name": "Alice", "row": 0, "col": 4, "walls": 10},
            "player2": {"id": "id-2", "name": "Bob", "row": 8, "col": 4, "walls": 9},
        },
        walls=[{"row": 3, "col": 3, "dir": "h"}],
        actions=["e3h"],
    )
    data.update(overrides)
    return GameModel(**data)


def test_create_game(db_session_repo: Session) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    model = mock_model()

    repo = SQLGameRepository(db_session_repo)
    record_in_db, _ = repo.create_game(model)
    assert isinstance(record_in_db, GameModel)
    assert record_in_db == model
    assert record_in_db.version == 0


def test_get_game_by_id(db_session_repo: Session) -> None:
    """Create a game, then fetch it from db."""
    repo = SQLGameRepository(db_session_repo)
    expected_game, game_id = repo.create_game(mock_model())
    game_found = repo.get_game(game_id)
    assert isinstance(game_found, GameModel)
    assert game_found == expected_game


def test_get_unknown_game(db_session_repo: Session) -> None:
    """Should return None if ID does not match anything in database."""
    repo = SQLGameRepository(db_session_repo)
    assert repo.get_game(uuid4()) is None

    # Now do it with creating a game, but retrieving from the wrong ID
    repo.create_game(mock_model())
    assert repo.get_game(uuid4()) is None


def test_expired_game_is_gone(db_session_repo: Session) -> None:
    """A room nobody touched within the TTL cannot be fetched, updated or deleted any more."""
    repo = SQLGameRepository(db_session_repo, ttl_seconds=-1)
    _, game_id = repo.create_game(mock_model())
    assert repo.get_game(game_id) is None
    assert repo.update_game(game_id, mock_model()) is None
    assert repo.delete_game(game_id) is None


def test_update_game(db_session_repo: Session) -> None:
    """Update an earlier created record. The version moves on by one."""
    repo = SQLGameRepository(db_session_repo)
    created, game_id = repo.create_game(mock_model(status=Status.WAITING.value))

    after = mock_model(turn="player2", walls=[], actions=[], version=created.version)
    updated_game = repo.update_game(game_id, after)
    assert updated_game is not None
    assert updated_game.turn == "player2"
    assert updated_game.walls == []
    assert updated_game.status == Status.PLAYING
    assert updated_game.version == 1
    assert repo.get_game(game_id) == updated_game


def test_consecutive_game_updates(db_session_repo: Session) -> None:
    """Tests that we can successfully make multiple updates to the same game, each one based on the previous."""
    repo = SQLGameRepository(db_session_repo)
    stored, game_id = repo.create_game(mock_model(walls=[], actions=[]))

    for notation, wall in [
        ("a1h", {"row": 0, "col": 0, "dir": "h"}),
        ("c1h", {"row": 0, "col": 2, "dir": "h"}),
        ("e1h", {"row": 0, "col": 4, "dir": "h"}),
    ]:
        next_model = mock_model(
            walls=[*stored.walls, wall],
            actions=[*stored.actions, notation],
            version=stored.version,
        )
        updated = repo.update_game(game_id, next_model)
        assert updated is not None
        stored = updated

    after_all_updates = repo.get_game(game_id)
    assert after_all_updates is not None
    assert after_all_updates.actions == ["a1h", "c1h", "e1h"]
    assert len(after_all_updates.walls) == 3
    assert after_all_updates.version == 3


def test_stale_update_rejected(db_session_repo: Session) -> None:
    """Writing back a snapshot that was loaded before someone else's write must fail."""
    repo = SQLGameRepository(db_session_repo)
    loaded, game_id = repo.create_game(mock_model())

    repo.update_game(game_id, mock_model(turn="player2", version=loaded.version))
    with pytest.raises(ConcurrentUpdateError):
        repo.update_game(game_id, mock_model(turn="player1", version=loaded.version))

    # first write survives
    stored = repo.get_game(game_id)
    assert stored is not None
    assert stored.turn == "player2"


def test_concurrent_sessions(db_session_repo: Session, second_db_session: Session) -> None:
    """Two requests (sessions) load the same game. Only the first to write gets through."""
    repo_a = SQLGameRepository(db_session_repo)
    repo_b = SQLGameRepository(second_db_session)
    _, game_id = repo_a.create_game(mock_model())

    seen_by_a = repo_a.get_game(game_id)
    seen_by_b = repo_b.get_game(game_id)
    assert seen_by_a is not None and seen_by_b is not None

    seen_by_a.turn = "player2"
    repo_a.update_game(game_id, seen_by_a)

    seen_by_b.actions = [*seen_by_b.actions, "e2"]
    with pytest.raises(ConcurrentUpdateError):
        repo_b.update_game(game_id, seen_by_b)


def test_attempt_updating_unknown_game(db_session_repo: Session) -> None:
    """the update_game() method should break early and return None"""
    repo = SQLGameRepository(db_session_repo)
    assert repo.update_game(uuid4(), mock_model()) is None


def test_delete_game(db_session_repo: Session) -> None:
    """Record of the game should no longer exist after deletion"""
    repo = SQLGameRepository(db_session_repo)
    created_game, game_id = repo.create_game(mock_model())
    deleted_game = repo.delete_game(game_id)

    # the correct game should be deleted
    assert deleted_game == created_game

    # The game should no longer be available in db
    assert repo.get_game(game_id) is None


def test_attempt_deleting_unknown_game(db_session_repo: Session) -> None:
    """the delete_game() method should break early and return None"""
    repo = SQLGameRepository(db_session_repo)
    assert repo.delete_game(uuid4()) is None
