"""Database tables / schema"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def expiry_from_now(ttl_seconds: int) -> datetime:
    return utc_now() + timedelta(seconds=ttl_seconds)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    status: Mapped[str]
    turn: Mapped[str]
    winner: Mapped[Optional[str]]
    players: Mapped[dict[str, dict]] = mapped_column(JSON)
    walls: Mapped[list[dict]] = mapped_column(JSON, default=list)
    actions: Mapped[list[str]] = mapped_column(JSON, default=list)
    # bumped on every write. Used for compare-and-set so two concurrent actions cannot both be accepted
    version: Mapped[int] = mapped_column(default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
