"""Validation of confirmed rosters before teams are generated."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from teamgen.models import PlayerRecord


class RosterError(ValueError):
    """Base class for rosters that cannot be split into two teams."""


class EmptyRoster(RosterError):
    def __init__(self) -> None:
        super().__init__("No players confirmed; at least two are required")


class OddRoster(RosterError):
    def __init__(self, count: int):
        super().__init__(f"Confirmed player count must be even, got {count}")
        self.count = count


class DuplicatePlayer(RosterError):
    def __init__(self, player_ids: Iterable[str]):
        self.player_ids = sorted(set(player_ids))
        super().__init__(f"Duplicate player ids in roster: {', '.join(self.player_ids)}")


def validate(roster: Sequence[PlayerRecord]) -> Tuple[PlayerRecord, ...]:
    """Return ``roster`` unchanged if it can be split, else raise a ``RosterError``.

    Checks run in order: empty, odd size, duplicate identifiers.
    """

    players = tuple(roster)
    if not players:
        raise EmptyRoster()
    if len(players) % 2 != 0:
        raise OddRoster(len(players))

    ensure_unique_ids(players)
    return players


def ensure_unique_ids(players: Iterable[PlayerRecord]) -> None:
    """Raise ``DuplicatePlayer`` if any identifier occurs more than once."""

    seen: set[str] = set()
    duplicates: list[str] = []
    for player in players:
        if player.player_id in seen:
            duplicates.append(player.player_id)
        seen.add(player.player_id)
    if duplicates:
        raise DuplicatePlayer(duplicates)


def sort_by_skill(roster: Iterable[PlayerRecord]) -> List[PlayerRecord]:
    """Ascending by skill; equal ratings keep their input order."""

    return sorted(roster, key=lambda player: player.skill)
