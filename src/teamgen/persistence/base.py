"""Contract shared by the team stores."""

from __future__ import annotations

from typing import ContextManager, Dict, Iterable, List, Optional, Protocol

from teamgen.models import PlayerRecord


class PersistenceFailure(RuntimeError):
    """A write could not be stored; nothing was committed."""

    def __init__(self, game_id: str | None, message: str):
        if game_id is None:
            super().__init__(f"Storage failure: {message}")
        else:
            super().__init__(f"Failed to store data for game {game_id}: {message}")
        self.game_id = game_id


class DuplicateConfirmation(ValueError):
    def __init__(self, game_id: str, player_id: str):
        super().__init__(f"Player {player_id} already confirmed for game {game_id}")
        self.game_id = game_id
        self.player_id = player_id


class NoConfirmedPlayers(LookupError):
    def __init__(self, game_id: str):
        super().__init__(f"No confirmed players for game {game_id}")
        self.game_id = game_id


TeamsByLabel = Dict[Optional[int], List[PlayerRecord]]


class TeamStore(Protocol):
    def upsert_player(self, player: PlayerRecord) -> None:
        ...

    def confirm_player(self, game_id: str, player_id: str) -> None:
        ...

    def load_roster(self, game_id: str) -> List[PlayerRecord]:
        ...

    def transaction(self, game_id: str) -> ContextManager[None]:
        """Serialize writes for ``game_id`` and apply them atomically.

        Entering clears any previous team labels of the game so the run
        replaces the old assignment instead of merging with it.
        """
        ...

    def assign_team(self, player_ids: Iterable[str], game_id: str, team_number: int) -> None:
        ...

    def teams_by_game(self, game_id: str) -> TeamsByLabel:
        ...


def check_team_number(team_number: int) -> None:
    if team_number not in (1, 2):
        raise ValueError(f"team_number must be 1 or 2, got {team_number!r}")


def group_by_team(rows: Iterable[tuple[PlayerRecord, Optional[int]]]) -> TeamsByLabel:
    grouped: TeamsByLabel = {}
    for player, team in rows:
        grouped.setdefault(team, []).append(player)
    return grouped
