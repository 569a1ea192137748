"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Any, Optional

# Type aliases to make the models easier to read
PieceColor = str
PlayerIdentity = str


@dataclass
class GameModel:
    """Transport-safe representation of a game state used between Service, DB, and domain layers."""

    fen: str
    moved_squares: list[str]
    move_history: list[dict[str, Any]]
    is_check: bool
    is_checkmate: bool
    is_stalemate: bool
    status: str


@dataclass
class RoomModel:
    """Room bookkeeping + the game played in it (once started)."""

    players: dict[PieceColor, PlayerIdentity]
    player_count: int
    game_started: bool
    status: str
    game: Optional[GameModel] = None
