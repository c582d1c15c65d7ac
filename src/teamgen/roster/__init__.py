"""Roster precondition checks."""

from .validation import (
    DuplicatePlayer,
    EmptyRoster,
    OddRoster,
    RosterError,
    ensure_unique_ids,
    sort_by_skill,
    validate,
)

__all__ = [
    "DuplicatePlayer",
    "EmptyRoster",
    "OddRoster",
    "RosterError",
    "ensure_unique_ids",
    "sort_by_skill",
    "validate",
]
