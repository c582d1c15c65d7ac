"""Split a skill-ordered roster into two balanced teams.

Allocation runs in two phases:

* goalkeeper extraction: when at least two players carry the goalkeeper
  flag, the two highest rated keepers are taken out of the pool, the first
  one to team 1 and the second one to team 2;
* skill balancing: the remaining pool is walked inward from both ends,
  pairing the weakest and strongest players left. Whole pairs go to the
  team with the lower skill total; with an odd number of pairs the
  innermost one is split so both teams keep the same headcount.

Nothing here mutates its input; extraction returns a new, reduced pool.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from teamgen.models import PlayerRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamAssignment:
    team_one: Tuple[str, ...]
    team_two: Tuple[str, ...]
    skill_one: float = 0.0
    skill_two: float = 0.0

    def as_mapping(self) -> Dict[str, int]:
        mapping = {player_id: 1 for player_id in self.team_one}
        mapping.update({player_id: 2 for player_id in self.team_two})
        return mapping

    def team_of(self, player_id: str) -> int:
        if player_id in self.team_one:
            return 1
        if player_id in self.team_two:
            return 2
        raise KeyError(player_id)

    @property
    def skill_gap(self) -> float:
        return abs(self.skill_one - self.skill_two)


def extract_goalkeepers(
    pool: Sequence[PlayerRecord],
) -> Tuple[Tuple[PlayerRecord, ...], Tuple[PlayerRecord, ...]]:
    """Return ``(keepers, remaining)``.

    ``keepers`` is empty or holds exactly two players, highest rated first.
    Goalkeepers beyond those two stay in ``remaining`` as ordinary players.
    """

    keepers = [player for player in pool if player.goalkeeper]
    if len(keepers) < 2:
        return (), tuple(pool)

    first = keepers.pop()
    second = keepers.pop()
    taken = {first.player_id, second.player_id}
    remaining = tuple(player for player in pool if player.player_id not in taken)
    return (first, second), remaining


def balance_pool(
    pool: Sequence[PlayerRecord],
    team_one: Sequence[PlayerRecord] = (),
    team_two: Sequence[PlayerRecord] = (),
) -> Tuple[List[PlayerRecord], List[PlayerRecord]]:
    """Distribute an ascending ``pool`` on top of the seeded teams.

    The pool is cut into (lowest, highest) pairs from the outside in. Each
    pair joins the team with the lower running total (team 1 on ties) until
    that team holds half of the whole pairs. If the pair count is odd, the
    innermost pair is split: its stronger player joins the lighter team and
    the weaker one the other team. A single middle player, which only an
    odd pool produces, joins the lighter team.

    Keeping both members of a pair on the same team departs from a literal
    "one of each pair per team" split, which would leave 10/20/30/40 at
    40 v 60 instead of 50 v 50.
    """

    teams = (list(team_one), list(team_two))
    totals = [_skill_total(teams[0]), _skill_total(teams[1])]

    pairs = [(pool[i], pool[-1 - i]) for i in range(len(pool) // 2)]
    middle = pool[len(pool) // 2] if len(pool) % 2 else None
    split = pairs.pop() if len(pairs) % 2 else None

    cap = len(pairs) // 2
    placed = [0, 0]
    for low, high in pairs:
        side = _lighter(totals)
        if placed[side] >= cap:
            side = 1 - side
        teams[side].extend((low, high))
        totals[side] += low.skill + high.skill
        placed[side] += 1

    if split is not None:
        low, high = split
        side = _lighter(totals)
        teams[side].append(high)
        teams[1 - side].append(low)
        totals[side] += high.skill
        totals[1 - side] += low.skill

    if middle is not None:
        teams[_lighter(totals)].append(middle)

    return teams[0], teams[1]


def allocate(roster: Sequence[PlayerRecord]) -> TeamAssignment:
    """Build two teams from a validated roster sorted ascending by skill.

    The roster is not re-checked here; pass it through
    :func:`teamgen.roster.validate` first.
    """

    keepers, remaining = extract_goalkeepers(roster)
    assert len(roster) - len(remaining) in (0, 2)

    seed_one = keepers[:1]
    seed_two = keepers[1:]
    one, two = balance_pool(remaining, seed_one, seed_two)

    assignment = TeamAssignment(
        team_one=tuple(player.player_id for player in one),
        team_two=tuple(player.player_id for player in two),
        skill_one=_skill_total(one),
        skill_two=_skill_total(two),
    )
    logger.info(
        "Allocated %d players (%d goalkeepers placed): team 1 %.1f, team 2 %.1f",
        len(roster),
        len(keepers),
        assignment.skill_one,
        assignment.skill_two,
    )
    return assignment


def _skill_total(players: Sequence[PlayerRecord]) -> float:
    return float(sum(player.skill for player in players))


def _lighter(totals: Sequence[float]) -> int:
    return 1 if totals[1] < totals[0] else 0
