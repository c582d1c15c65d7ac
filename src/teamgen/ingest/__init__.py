"""Input adapters that normalize raw roster data."""

from .roster import DEFAULT_ROSTER_MAPPING, load_roster_csv, parse_goalkeeper

__all__ = ["DEFAULT_ROSTER_MAPPING", "load_roster_csv", "parse_goalkeeper"]
