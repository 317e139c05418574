"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
SideName = str
PlayerRecord = dict[str, str | int]  # {"id", "name", "row", "col", "walls"}
WallRecord = dict[str, str | int]  # {"row", "col", "dir"}


@dataclass
class GameModel:
    """Transport-safe representation of a Quoridor game used between API, Service, DB, and Game layers."""

    status: str
    turn: SideName
    winner: Optional[SideName]
    players: dict[SideName, PlayerRecord]
    walls: list[WallRecord]
    actions: list[str] = field(default_factory=list)
    # persistence generation the snapshot was loaded at (see GameRepository.update_game)
    version: int = 0
