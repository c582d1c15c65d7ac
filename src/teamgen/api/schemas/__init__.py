"""Pydantic models for API I/O."""

from .teams import (
    ConfirmationRequest,
    ConfirmationResponse,
    PlayerPayload,
    PlayerResponse,
    TeamResponse,
    TeamsResponse,
)

__all__ = [
    "ConfirmationRequest",
    "ConfirmationResponse",
    "PlayerPayload",
    "PlayerResponse",
    "TeamResponse",
    "TeamsResponse",
]
