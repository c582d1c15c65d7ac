"""Generate and store teams for a game."""

from __future__ import annotations

import logging

from teamgen.persistence import TeamStore
from teamgen.roster import sort_by_skill, validate

from .balance import TeamAssignment, allocate


logger = logging.getLogger(__name__)


def generate_teams(game_id: str, store: TeamStore) -> TeamAssignment:
    """Replace the team assignment of ``game_id`` with a freshly balanced one.

    The roster is read, validated and written inside one store transaction.
    A ``RosterError`` aborts before allocation and leaves stored teams
    untouched; a storage error surfaces as a single ``PersistenceFailure``
    covering both team writes.
    """

    with store.transaction(game_id):
        roster = validate(store.load_roster(game_id))
        assignment = allocate(sort_by_skill(roster))
        store.assign_team(assignment.team_one, game_id, 1)
        store.assign_team(assignment.team_two, game_id, 2)

    logger.info(
        "Stored teams for game %s (%d v %d, skill gap %.1f)",
        game_id,
        len(assignment.team_one),
        len(assignment.team_two),
        assignment.skill_gap,
    )
    return assignment
