"""CSV export helpers for ranked player lists."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from fantabid.models import Player


EXPORT_HEADERS = ("rank", "name", "role", "team", "ageband", "base_value", "score")


def export_players_to_csv(players: Sequence[Player]) -> str:
    """Write ``players`` in the given order, one row each with its rank."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_HEADERS)
    for rank, player in enumerate(players, start=1):
        writer.writerow([
            rank,
            player.name,
            player.role,
            player.team,
            player.ageband,
            f"{player.base_value:g}",
            "" if player.score is None else f"{player.score:.3f}",
        ])
    return buffer.getvalue()


__all__ = [
    "EXPORT_HEADERS",
    "export_players_to_csv",
]
