"""Input adapters that turn roster exports into canonical players."""

from .roster import (
    DEFAULT_ROSTER_MAPPING,
    IngestReport,
    RosterRow,
    load_roster_csv,
    parse_roster_csv,
    rows_to_players,
)

__all__ = [
    "DEFAULT_ROSTER_MAPPING",
    "IngestReport",
    "RosterRow",
    "load_roster_csv",
    "parse_roster_csv",
    "rows_to_players",
]
