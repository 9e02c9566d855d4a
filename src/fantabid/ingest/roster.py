"""Helpers to load roster CSVs and emit canonical player records."""

from __future__ import annotations

import csv
import logging
import math
import re
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel

from fantabid.models import Player, normalize_role


logger = logging.getLogger(__name__)

# Column names used by the usual auction list exports.
DEFAULT_ROSTER_MAPPING = {
    "name": "Nome",
    "team": "Sq.",
    "ageband": "Under",
    "role": "R.",
    "base_value": "FVMP",
    "priority": "P",
    "user_score": "S",
}


class RosterRow(BaseModel):
    raw_name: str
    raw_team: str = ""
    raw_ageband: str = ""
    raw_role: str = ""
    raw_base_value: str = ""
    raw_priority: Optional[str] = None
    raw_user_score: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Optional[str]], mapping: Mapping[str, str]) -> "RosterRow":
        def extract(key: str, *, default: Optional[str] = None) -> Optional[str]:
            column = mapping.get(key, DEFAULT_ROSTER_MAPPING.get(key))
            if column is None:
                return default
            value = row.get(column)
            return value.strip() if value is not None else default

        return cls(
            raw_name=extract("name", default="") or "",
            raw_team=extract("team", default="") or "",
            raw_ageband=extract("ageband", default="") or "",
            raw_role=extract("role", default="") or "",
            raw_base_value=extract("base_value", default="") or "",
            raw_priority=extract("priority"),
            raw_user_score=extract("user_score"),
        )


@dataclass
class IngestReport:
    total_rows: int = 0
    loaded_players: int = 0
    skipped_rows: List[str] = field(default_factory=list)


def _parse_number(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    text = raw.strip().replace(",", ".")
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    # float() accepts "nan" and "inf"; treat them like any other bad cell.
    return value if math.isfinite(value) else None


def _parse_base_value(raw: str) -> float:
    value = _parse_number(raw)
    return value if value is not None else 0.0


def _parse_priority(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    match = re.match(r"^\s*-?\d+", raw)
    if not match:
        return None
    value = int(match.group(0))
    # Zero means "no priority" in the source lists.
    return value or None


def _parse_user_score(raw: Optional[str]) -> Optional[float]:
    value = _parse_number(raw)
    return value or None


def rows_to_players(rows: Sequence[RosterRow]) -> Tuple[List[Player], IngestReport]:
    """Validate rows into players; rows with no name or an unknown role are skipped."""

    players: List[Player] = []
    report = IngestReport(total_rows=len(rows))
    for index, row in enumerate(rows, start=1):
        label = row.raw_name or f"row {index}"
        if not row.raw_name:
            report.skipped_rows.append(label)
            continue
        try:
            role = normalize_role(row.raw_role)
        except ValueError:
            logger.warning("Skipping %s: unknown role %r", label, row.raw_role)
            report.skipped_rows.append(label)
            continue
        players.append(
            Player(
                name=row.raw_name,
                role=role,
                team=row.raw_team,
                ageband=row.raw_ageband,
                base_value=_parse_base_value(row.raw_base_value),
                priority=_parse_priority(row.raw_priority),
                user_score=_parse_user_score(row.raw_user_score),
            )
        )
    report.loaded_players = len(players)
    return players, report


def _read_rows(handle: Iterable[str], mapping: Mapping[str, str]) -> List[RosterRow]:
    reader = csv.DictReader(handle)
    return [
        RosterRow.from_mapping(row, mapping)
        for row in reader
        if any((value or "").strip() for value in row.values() if isinstance(value, str))
    ]


def parse_roster_csv(
    text: str,
    *,
    mapping: Mapping[str, str] | None = None,
) -> Tuple[List[Player], IngestReport]:
    """Parse CSV text (e.g. an uploaded file) into players."""

    rows = _read_rows(StringIO(text.lstrip("\ufeff")), mapping or DEFAULT_ROSTER_MAPPING)
    return rows_to_players(rows)


def load_roster_csv(
    path: Path,
    *,
    mapping: Mapping[str, str] | None = None,
) -> Tuple[List[Player], IngestReport]:
    with path.open(newline="", encoding="utf-8-sig") as f:
        rows = _read_rows(f, mapping or DEFAULT_ROSTER_MAPPING)
    players, report = rows_to_players(rows)
    logger.info(
        "Loaded %d/%d players from %s", report.loaded_players, report.total_rows, path
    )
    return players, report
