"""Load player rosters from CSV files."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, List, Mapping

from pydantic import ValidationError

from teamgen.models import PlayerRecord


DEFAULT_ROSTER_MAPPING: Dict[str, str] = {
    "player_id": "player_id",
    "name": "name",
    "skill": "skill",
    "goalkeeper": "goalkeeper",
}

_REQUIRED_FIELDS = ("player_id", "skill")
_TRUE_VALUES = {"1", "true", "yes", "y", "x"}
_FALSE_VALUES = {"", "0", "false", "no", "n"}


def parse_goalkeeper(raw: str | None) -> bool:
    value = (raw or "").strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Unrecognized goalkeeper flag {raw!r}")


def load_roster_csv(path: Path, mapping: Mapping[str, str] | None = None) -> List[PlayerRecord]:
    """Read ``path`` into player records.

    ``mapping`` overrides the CSV header used for each field; fields not
    mentioned keep the default header. ``name`` and ``goalkeeper`` columns
    are optional.
    """

    columns = {**DEFAULT_ROSTER_MAPPING, **dict(mapping or {})}
    with path.open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        headers = set(reader.fieldnames or [])
        missing = [columns[field] for field in _REQUIRED_FIELDS if columns[field] not in headers]
        if missing:
            raise ValueError(f"Roster CSV is missing columns: {', '.join(missing)}")

        records: List[PlayerRecord] = []
        # header is line 1
        for line_no, row in enumerate(reader, start=2):
            try:
                records.append(
                    PlayerRecord(
                        player_id=(row.get(columns["player_id"]) or "").strip(),
                        name=(row.get(columns["name"]) or "").strip(),
                        skill=float((row.get(columns["skill"]) or "").strip()),
                        goalkeeper=parse_goalkeeper(row.get(columns["goalkeeper"])),
                    )
                )
            except (ValueError, ValidationError) as exc:
                raise ValueError(f"Invalid roster row on line {line_no}: {exc}") from exc
    return records
