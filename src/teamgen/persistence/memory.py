"""Dictionary-backed store used by the CLI and the test-suite."""

from __future__ import annotations

import copy
import threading
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Optional

from teamgen.models import PlayerRecord
from teamgen.roster import sort_by_skill

from .base import (
    DuplicateConfirmation,
    NoConfirmedPlayers,
    TeamsByLabel,
    check_team_number,
    group_by_team,
)


class InMemoryTeamStore:
    def __init__(self) -> None:
        self._players: Dict[str, PlayerRecord] = {}
        # game_id -> {player_id: team label or None}, in RSVP order
        self._games: Dict[str, Dict[str, Optional[int]]] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._guard = threading.Lock()
        self.write_log: List[tuple[str, tuple[str, ...], int]] = []

    def upsert_player(self, player: PlayerRecord) -> None:
        self._players[player.player_id] = player

    def confirm_player(self, game_id: str, player_id: str) -> None:
        if player_id not in self._players:
            raise KeyError(player_id)
        # waits for an open team transaction so its rollback cannot drop the RSVP
        with self._lock_for(game_id):
            rsvps = self._games.setdefault(game_id, {})
            if player_id in rsvps:
                raise DuplicateConfirmation(game_id, player_id)
            rsvps[player_id] = None

    def load_roster(self, game_id: str) -> List[PlayerRecord]:
        rsvps = self._games.get(game_id, {})
        return sort_by_skill(self._players[player_id] for player_id in rsvps)

    @contextmanager
    def transaction(self, game_id: str) -> Iterator[None]:
        with self._lock_for(game_id):
            snapshot = copy.deepcopy(self._games.get(game_id))
            log_size = len(self.write_log)
            rsvps = self._games.get(game_id, {})
            for player_id in rsvps:
                rsvps[player_id] = None
            try:
                yield
            except BaseException:
                if snapshot is None:
                    self._games.pop(game_id, None)
                else:
                    self._games[game_id] = snapshot
                del self.write_log[log_size:]
                raise

    def assign_team(self, player_ids: Iterable[str], game_id: str, team_number: int) -> None:
        check_team_number(team_number)
        ids = tuple(player_ids)
        rsvps = self._games.get(game_id, {})
        for player_id in ids:
            if player_id in rsvps:
                rsvps[player_id] = team_number
        self.write_log.append((game_id, ids, team_number))

    def teams_by_game(self, game_id: str) -> TeamsByLabel:
        rsvps = self._games.get(game_id)
        if not rsvps:
            raise NoConfirmedPlayers(game_id)
        rows = sorted(
            ((self._players[player_id], team) for player_id, team in rsvps.items()),
            key=lambda row: row[0].skill,
        )
        return group_by_team(rows)

    def _lock_for(self, game_id: str) -> threading.RLock:
        with self._guard:
            return self._locks.setdefault(game_id, threading.RLock())
