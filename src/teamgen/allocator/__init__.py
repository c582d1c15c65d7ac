"""Team allocation: goalkeeper spread plus skill balancing."""

from .balance import TeamAssignment, allocate, balance_pool, extract_goalkeepers
from .service import generate_teams

__all__ = [
    "TeamAssignment",
    "allocate",
    "balance_pool",
    "extract_goalkeepers",
    "generate_teams",
]
