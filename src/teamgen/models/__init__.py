"""Shared models."""

from .player import PlayerRecord

__all__ = ["PlayerRecord"]
