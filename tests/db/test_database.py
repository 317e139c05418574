"""Unit tests for src/db/database.py"""

from sqlalchemy import StaticPool, inspect
from sqlalchemy.orm import Session

from src.db.database import get_db, init_db, make_engine


def test_in_memory_engine_keeps_one_connection() -> None:
    engine = make_engine("sqlite:///:memory:", echo=False)
    assert isinstance(engine.pool, StaticPool)


def test_init_db_creates_tables() -> None:
    engine = make_engine("sqlite:///:memory:", echo=False)
    init_db(engine)
    assert "games" in inspect(engine).get_table_names()


def test_get_db_yields_and_closes_session() -> None:
    sessions = get_db()
    session = next(sessions)
    assert isinstance(session, Session)
    sessions.close()
