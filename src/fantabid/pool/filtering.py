"""Helpers for searching the roster by name, team, role and availability."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from fantabid.draft.state import DraftState
from fantabid.draft.suggestions import rank_players
from fantabid.models import Player, Role


@dataclass(frozen=True)
class PlayerFilter:
    """Search criteria for the roster pool."""

    name: str | None = None
    team: str | None = None
    role: Role | None = None
    available_only: bool = False
    limit: int | None = None

    def is_empty(self) -> bool:
        return not (self.name or self.team or self.role or self.available_only)


def _passes_criteria(player: Player, criteria: PlayerFilter, taken: set[str]) -> bool:
    if criteria.name and criteria.name.strip().casefold() not in player.name.casefold():
        return False
    if criteria.team and criteria.team.strip().casefold() not in player.team.casefold():
        return False
    if criteria.role and player.role != criteria.role:
        return False
    if criteria.available_only and player.key in taken:
        return False
    return True


def filter_players(state: DraftState, criteria: PlayerFilter) -> List[Player]:
    """Return matching roster players ordered by descending score."""

    taken = state.taken_keys()
    matches = [
        player for player in state.roster if _passes_criteria(player, criteria, taken)
    ]
    ranked = rank_players(matches)
    limit = criteria.limit if criteria.limit is not None and criteria.limit > 0 else None
    if limit is not None:
        ranked = ranked[:limit]
    return ranked


__all__ = [
    "PlayerFilter",
    "filter_players",
]
