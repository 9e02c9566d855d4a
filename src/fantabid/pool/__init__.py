"""Player pool utilities (search, export, etc.)."""

from .export import EXPORT_HEADERS, export_players_to_csv
from .filtering import PlayerFilter, filter_players

__all__ = [
    "EXPORT_HEADERS",
    "PlayerFilter",
    "export_players_to_csv",
    "filter_players",
]
