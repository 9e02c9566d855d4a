"""Ranked bid suggestions per role."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from fantabid.models import ROLES, Player, Role, normalize_role

from .budget import budget_breakdown, remaining_needed
from .state import DraftState


@dataclass(frozen=True)
class RoleSuggestions:
    """Standard ignores budget; optimized keeps only affordable, cap-compliant players."""

    standard: Tuple[Player, ...] = ()
    optimized: Tuple[Player, ...] = ()


def _score(player: Player) -> float:
    return player.score if player.score is not None else float("-inf")


def rank_players(players: Iterable[Player]) -> List[Player]:
    """Sort by descending score; ties keep their original order."""

    return sorted(players, key=_score, reverse=True)


def available_pool(state: DraftState, role: Role) -> List[Player]:
    taken = state.taken_keys()
    return [
        player
        for player in state.roster
        if player.role == role and player.key not in taken
    ]


def get_suggestions(state: DraftState) -> Dict[Role, RoleSuggestions]:
    need = remaining_needed(state)
    budgets = budget_breakdown(state)
    top_k = state.config.top_k

    suggestions: Dict[Role, RoleSuggestions] = {}
    for role in ROLES:
        if need[role] <= 0:
            suggestions[role] = RoleSuggestions()
            continue
        pool = rank_players(available_pool(state, role))
        allowance = budgets[role].remaining
        optimized = [
            player
            for player in pool
            if player.base_value <= allowance and player.base_value <= state.budget_remaining
        ]
        suggestions[role] = RoleSuggestions(
            standard=tuple(pool[:top_k]),
            optimized=tuple(optimized[:top_k]),
        )
    return suggestions


def top_by_role(state: DraftState, role: str, k: int) -> List[Player]:
    """Best ``k`` roster players for ``role`` regardless of need, budget or availability."""

    resolved = normalize_role(role)
    ranked = rank_players(player for player in state.roster if player.role == resolved)
    return ranked[: max(0, k)]
