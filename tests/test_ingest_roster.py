from pathlib import Path

import pytest

from teamgen.ingest import load_roster_csv, parse_goalkeeper


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "roster.csv"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_roster_with_default_columns(tmp_path):
    path = _write(
        tmp_path,
        "player_id,name,skill,goalkeeper\n"
        "p1,Ana,7.5,1\n"
        "p2,Bruno,6,\n"
        "p3,Caio,8,yes\n",
    )

    players = load_roster_csv(path)

    assert [player.player_id for player in players] == ["p1", "p2", "p3"]
    assert [player.goalkeeper for player in players] == [True, False, True]
    assert players[0].skill == 7.5
    assert players[1].name == "Bruno"


def test_load_roster_with_column_mapping_and_no_goalkeeper_column(tmp_path):
    path = _write(tmp_path, "Id,Player,Rating\n10,Dora,4\n11,Eli,5\n")

    players = load_roster_csv(path, {"player_id": "Id", "name": "Player", "skill": "Rating"})

    assert [(player.player_id, player.name, player.skill) for player in players] == [
        ("10", "Dora", 4.0),
        ("11", "Eli", 5.0),
    ]
    assert not any(player.goalkeeper for player in players)


def test_missing_required_column_is_reported(tmp_path):
    path = _write(tmp_path, "player_id,name\np1,Ana\n")

    with pytest.raises(ValueError, match="skill"):
        load_roster_csv(path)


def test_bad_row_reports_line_number(tmp_path):
    path = _write(tmp_path, "player_id,skill\np1,5\np2,lots\n")

    with pytest.raises(ValueError, match="line 3"):
        load_roster_csv(path)


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("TRUE", True), (" x ", True), ("", False), (None, False), ("no", False), ("0", False)],
)
def test_parse_goalkeeper(raw, expected):
    assert parse_goalkeeper(raw) is expected


def test_parse_goalkeeper_rejects_unknown_values():
    with pytest.raises(ValueError):
        parse_goalkeeper("maybe")
