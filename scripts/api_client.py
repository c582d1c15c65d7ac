"""Lightweight REST client for the teamgen API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx

from teamgen.ingest import load_roster_csv


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the teamgen REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("game_id", help="Game to confirm players for and split into teams")
    parser.add_argument("roster", type=Path, nargs="?", help="Roster CSV to register and confirm")
    parser.add_argument("--show-only", action="store_true", help="Print the stored teams and exit")
    parser.add_argument("--no-generate", action="store_true", help="Confirm players without generating teams")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.show_only:
            resp = client.get(f"/games/{args.game_id}/teams")
            if resp.status_code == 404:
                raise SystemExit(f"game {args.game_id} has no confirmed players")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.roster is not None:
            for player in load_roster_csv(args.roster):
                resp = client.put(
                    f"/players/{player.player_id}",
                    json={"name": player.name, "skill": player.skill, "goalkeeper": player.goalkeeper},
                )
                resp.raise_for_status()
                resp = client.post(f"/games/{args.game_id}/players", json={"player_id": player.player_id})
                if resp.status_code == 409:
                    print(f"{player.player_id} already confirmed")
                    continue
                resp.raise_for_status()
            print(f"Confirmed roster from {args.roster}")

        if args.no_generate:
            return

        resp = client.post(f"/games/{args.game_id}/teams")
        if resp.status_code == 400:
            raise SystemExit(f"cannot generate teams: {resp.json()['detail']}")
        resp.raise_for_status()
        print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
