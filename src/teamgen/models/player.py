"""Canonical player model shared across ingestion, allocation and storage."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PlayerRecord(BaseModel):
    """Confirmed player as seen by the team allocator."""

    player_id: str = Field(..., min_length=1)
    name: str = ""
    skill: float = Field(..., ge=0.0)
    goalkeeper: bool = False

    model_config = ConfigDict(frozen=True)
