"""REST API for RSVPs and team generation."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from teamgen.allocator import generate_teams
from teamgen.api.schemas import (
    ConfirmationRequest,
    ConfirmationResponse,
    PlayerPayload,
    PlayerResponse,
    TeamResponse,
    TeamsResponse,
)
from teamgen.config import load_settings
from teamgen.models import PlayerRecord
from teamgen.persistence import (
    DuplicateConfirmation,
    NoConfirmedPlayers,
    PersistenceFailure,
    SQLiteTeamStore,
    TeamStore,
)
from teamgen.roster import RosterError


logger = logging.getLogger(__name__)


def _player_response(player: PlayerRecord) -> PlayerResponse:
    return PlayerResponse(
        player_id=player.player_id,
        name=player.name,
        skill=player.skill,
        goalkeeper=player.goalkeeper,
    )


def _teams_response(game_id: str, store: TeamStore) -> TeamsResponse:
    try:
        grouped = store.teams_by_game(game_id)
    except NoConfirmedPlayers as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    teams = [
        TeamResponse(
            team=label,
            skill=sum(player.skill for player in grouped.get(label, [])),
            players=[_player_response(player) for player in grouped.get(label, [])],
        )
        for label in (1, 2)
        if label in grouped
    ]
    unassigned = [_player_response(player) for player in grouped.get(None, [])]
    return TeamsResponse(game_id=game_id, teams=teams, unassigned=unassigned)


def create_app(store: TeamStore | None = None) -> FastAPI:
    app = FastAPI(title="teamgen")
    if store is None:
        settings = load_settings()
        store = SQLiteTeamStore(settings.db_path, timeout=settings.db_timeout)
    app.state.team_store = store

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.put("/players/{player_id}", response_model=PlayerResponse)
    async def upsert_player(player_id: str, payload: PlayerPayload) -> PlayerResponse:
        player = PlayerRecord(
            player_id=player_id,
            name=payload.name,
            skill=payload.skill,
            goalkeeper=payload.goalkeeper,
        )
        try:
            store.upsert_player(player)
        except PersistenceFailure as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return _player_response(player)

    @app.post("/games/{game_id}/players", response_model=ConfirmationResponse, status_code=201)
    async def confirm_player(game_id: str, payload: ConfirmationRequest) -> ConfirmationResponse:
        try:
            store.confirm_player(game_id, payload.player_id)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=f"Unknown player {payload.player_id}") from exc
        except DuplicateConfirmation as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except PersistenceFailure as exc:
            logger.error("RSVP failed for game %s: %s", game_id, exc)
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return ConfirmationResponse(game_id=game_id, player_id=payload.player_id)

    @app.post("/games/{game_id}/teams", response_model=TeamsResponse)
    async def create_teams(game_id: str) -> TeamsResponse:
        try:
            generate_teams(game_id, store)
        except RosterError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except PersistenceFailure as exc:
            logger.error("Team generation failed for game %s: %s", game_id, exc)
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return _teams_response(game_id, store)

    @app.get("/games/{game_id}/teams", response_model=TeamsResponse)
    async def list_teams(game_id: str) -> TeamsResponse:
        return _teams_response(game_id, store)

    return app
