from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class PlayerPayload(BaseModel):
    name: str = ""
    skill: float = Field(..., ge=0.0)
    goalkeeper: bool = False


class PlayerResponse(BaseModel):
    player_id: str
    name: str
    skill: float
    goalkeeper: bool


class ConfirmationRequest(BaseModel):
    player_id: str = Field(..., min_length=1)


class ConfirmationResponse(BaseModel):
    game_id: str
    player_id: str


class TeamResponse(BaseModel):
    team: int
    skill: float
    players: List[PlayerResponse]


class TeamsResponse(BaseModel):
    game_id: str
    teams: List[TeamResponse]
    unassigned: List[PlayerResponse] = Field(default_factory=list)
