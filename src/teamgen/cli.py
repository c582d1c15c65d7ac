"""Command-line interface for splitting a CSV roster into two teams."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from teamgen.allocator import TeamAssignment, generate_teams
from teamgen.config import load_settings
from teamgen.ingest import load_roster_csv
from teamgen.models import PlayerRecord
from teamgen.persistence import (
    DuplicateConfirmation,
    InMemoryTeamStore,
    PersistenceFailure,
    SQLiteTeamStore,
    TeamStore,
)
from teamgen.roster import RosterError, ensure_unique_ids


logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Split confirmed players into two balanced teams")
    parser.add_argument("roster", type=Path, help="Path to roster CSV")
    parser.add_argument("--game-id", default="default", help="Game the roster belongs to")
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite file to store players and teams in (in-memory if omitted)",
    )
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., skill=Rating)",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write teams JSON")
    parser.add_argument("--log-level", default=None, help="Logging level (default from TEAMGEN_LOG_LEVEL)")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _load_store(players: list[PlayerRecord], game_id: str, db_path: Path | None, timeout: float) -> TeamStore:
    store: TeamStore
    if db_path is None:
        store = InMemoryTeamStore()
    else:
        store = SQLiteTeamStore(db_path, timeout=timeout)
    for player in players:
        store.upsert_player(player)
        try:
            store.confirm_player(game_id, player.player_id)
        except DuplicateConfirmation:
            logger.info("Player %s already confirmed for game %s", player.player_id, game_id)
    return store


def _format_team(label: int, players: list[PlayerRecord]) -> str:
    total = sum(player.skill for player in players)
    lines = [f"Team {label} (skill {total:g})"]
    for player in players:
        marker = " [GK]" if player.goalkeeper else ""
        lines.append(f"  {player.player_id:<12} {player.name:<24} {player.skill:>6g}{marker}")
    return "\n".join(lines)


def _assignment_payload(game_id: str, assignment: TeamAssignment) -> dict:
    return {
        "game_id": game_id,
        "teams": {"1": list(assignment.team_one), "2": list(assignment.team_two)},
        "skill": {"1": assignment.skill_one, "2": assignment.skill_two},
    }


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    settings = load_settings()
    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        players = load_roster_csv(args.roster, _parse_mapping(args.column))
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Could not read roster: {exc}") from exc

    try:
        ensure_unique_ids(players)
    except RosterError as exc:
        raise SystemExit(f"Invalid roster: {exc}") from exc

    try:
        store = _load_store(players, args.game_id, args.db, settings.db_timeout)
        assignment = generate_teams(args.game_id, store)
    except RosterError as exc:
        raise SystemExit(f"Cannot generate teams: {exc}") from exc
    except PersistenceFailure as exc:
        raise SystemExit(f"Could not store teams: {exc}") from exc

    grouped = store.teams_by_game(args.game_id)
    for label in (1, 2):
        print(_format_team(label, grouped.get(label, [])))
    print(f"Skill gap: {assignment.skill_gap:g}")

    if args.output:
        args.output.write_text(
            json.dumps(_assignment_payload(args.game_id, assignment), indent=2),
            encoding="utf-8",
        )
        print(f"Wrote teams to {args.output}")


if __name__ == "__main__":
    main()
