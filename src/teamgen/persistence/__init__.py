"""Storage adapters for players, RSVPs and team assignments."""

from .base import (
    DuplicateConfirmation,
    NoConfirmedPlayers,
    PersistenceFailure,
    TeamStore,
)
from .memory import InMemoryTeamStore
from .sqlite import SQLiteTeamStore

__all__ = [
    "DuplicateConfirmation",
    "InMemoryTeamStore",
    "NoConfirmedPlayers",
    "PersistenceFailure",
    "SQLiteTeamStore",
    "TeamStore",
]
