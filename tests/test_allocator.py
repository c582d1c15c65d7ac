import random

import pytest

from teamgen.allocator import TeamAssignment, allocate, balance_pool, extract_goalkeepers
from teamgen.models import PlayerRecord
from teamgen.roster import sort_by_skill


def _player(player_id: str, skill: float, goalkeeper: bool = False) -> PlayerRecord:
    return PlayerRecord(player_id=player_id, skill=skill, goalkeeper=goalkeeper)


def _skills(roster: list[PlayerRecord], ids: tuple[str, ...]) -> float:
    by_id = {player.player_id: player.skill for player in roster}
    return sum(by_id[player_id] for player_id in ids)


def test_four_players_without_goalkeepers_balance_exactly():
    roster = [_player("p10", 10), _player("p20", 20), _player("p30", 30), _player("p40", 40)]

    assignment = allocate(roster)

    assert assignment.team_one == ("p10", "p40")
    assert assignment.team_two == ("p20", "p30")
    assert assignment.skill_one == assignment.skill_two == 50


def test_two_goalkeepers_split_and_rest_paired_inward():
    roster = [
        _player("p3", 3),
        _player("g5", 5, goalkeeper=True),
        _player("p8", 8),
        _player("p12", 12),
        _player("g15", 15, goalkeeper=True),
        _player("p20", 20),
    ]

    assignment = allocate(roster)

    assert assignment.team_one == ("g15", "p8", "p12")
    assert assignment.team_two == ("g5", "p3", "p20")
    assert assignment.skill_one == 35
    assert assignment.skill_two == 28


def test_only_two_highest_goalkeepers_are_extracted():
    roster = [
        _player("p1", 1),
        _player("g4", 4, goalkeeper=True),
        _player("g6", 6, goalkeeper=True),
        _player("g9", 9, goalkeeper=True),
    ]

    keepers, remaining = extract_goalkeepers(roster)
    assert [player.player_id for player in keepers] == ["g9", "g6"]
    assert [player.player_id for player in remaining] == ["p1", "g4"]

    assignment = allocate(roster)
    assert assignment.team_one == ("g9", "p1")
    assert assignment.team_two == ("g6", "g4")


def test_single_goalkeeper_gets_no_special_placement():
    roster = [_player("g10", 10, goalkeeper=True), _player("p20", 20), _player("p30", 30), _player("p40", 40)]

    keepers, remaining = extract_goalkeepers(roster)
    assert keepers == ()
    assert remaining == tuple(roster)

    assignment = allocate(roster)
    assert assignment.skill_one == assignment.skill_two == 50


def test_extraction_does_not_mutate_input():
    roster = [_player("g1", 1, goalkeeper=True), _player("p2", 2), _player("g3", 3, goalkeeper=True), _player("p4", 4)]
    snapshot = list(roster)

    extract_goalkeepers(roster)
    allocate(roster)

    assert roster == snapshot


def test_balance_pool_splits_innermost_pair_when_pair_count_is_odd():
    pool = [_player(player_id, skill) for player_id, skill in zip("abcdef", range(1, 7))]

    one, two = balance_pool(pool)

    assert [player.player_id for player in one] == ["a", "f", "d"]
    assert [player.player_id for player in two] == ["b", "e", "c"]


def test_balance_pool_caps_whole_pairs_per_team():
    # team 1 starts far ahead, so every pair would go to team 2 without the cap
    pool = [_player(player_id, skill) for player_id, skill in zip("abcd", (1, 2, 3, 4))]

    one, two = balance_pool(pool, team_one=[_player("gk1", 50)], team_two=[_player("gk2", 1)])

    assert [player.player_id for player in one] == ["gk1", "b", "c"]
    assert [player.player_id for player in two] == ["gk2", "a", "d"]


def test_balance_pool_places_middle_player_on_lower_total():
    pool = [_player("a", 1), _player("b", 2), _player("c", 3)]

    one, two = balance_pool(pool)
    assert [player.player_id for player in one] == ["c"]
    assert [player.player_id for player in two] == ["a", "b"]

    one, two = balance_pool(pool, team_one=[_player("gk", 10)])
    assert [player.player_id for player in one] == ["gk", "a"]
    assert [player.player_id for player in two] == ["c", "b"]


def test_balance_pool_leftover_tie_goes_to_team_one():
    one, two = balance_pool([_player("solo", 5)])
    assert [player.player_id for player in one] == ["solo"]
    assert two == []


def test_equal_skill_permutation_keeps_balance():
    first = [_player("a", 5), _player("b", 10), _player("c", 10), _player("d", 15)]
    second = [first[0], first[2], first[1], first[3]]

    left = allocate(first)
    right = allocate(second)

    assert (left.skill_one, left.skill_two) == (right.skill_one, right.skill_two)


@pytest.mark.parametrize("seed", range(20))
def test_every_player_lands_on_exactly_one_team(seed):
    rng = random.Random(seed)
    size = rng.randrange(2, 31, 2)
    roster = sort_by_skill(
        _player(f"p{i}", rng.randint(1, 100), goalkeeper=rng.random() < 0.2) for i in range(size)
    )

    assignment = allocate(roster)

    one, two = set(assignment.team_one), set(assignment.team_two)
    assert len(assignment.team_one) == len(assignment.team_two) == size // 2
    assert one.isdisjoint(two)
    assert one | two == {player.player_id for player in roster}
    assert assignment.skill_one == _skills(roster, assignment.team_one)
    assert assignment.skill_two == _skills(roster, assignment.team_two)

    keepers = [player for player in roster if player.goalkeeper]
    if len(keepers) >= 2:
        top_two = {keepers[-1].player_id, keepers[-2].player_id}
        assert len(top_two & one) == 1
        assert len(top_two & two) == 1


def test_team_assignment_mapping_helpers():
    assignment = TeamAssignment(team_one=("a", "b"), team_two=("c", "d"), skill_one=3, skill_two=7)

    assert assignment.as_mapping() == {"a": 1, "b": 1, "c": 2, "d": 2}
    assert assignment.team_of("c") == 2
    assert assignment.skill_gap == 4
    with pytest.raises(KeyError):
        assignment.team_of("z")
