"""Per-opponent roster summaries built from observed purchases."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from fantabid.models import ROLES, Role

from .state import DraftState, OpponentPlayer


UNKNOWN_ROLE = "unknown"


@dataclass(frozen=True)
class OpponentSummary:
    owner: str
    budget_remaining: float
    spent: float
    players_by_role: Dict[str, Tuple[OpponentPlayer, ...]]
    counts: Dict[Role, int]
    missing: Dict[Role, int]
    warnings: List[str] = field(default_factory=list)


def opponent_summary(state: DraftState) -> List[OpponentSummary]:
    """Group each opponent's players by role and compare against the targets.

    Players whose name is not in the roster are grouped under ``unknown``.
    """

    summaries: List[OpponentSummary] = []
    for owner, ledger in state.opponents.items():
        grouped: Dict[str, List[OpponentPlayer]] = {role: [] for role in ROLES}
        for player in ledger.players:
            match = state.find_player(player.name)
            key = match.role if match is not None else UNKNOWN_ROLE
            grouped.setdefault(key, []).append(player)

        counts: Dict[Role, int] = {role: len(grouped[role]) for role in ROLES}
        missing = {
            role: max(0, state.config.targets[role] - counts[role]) for role in ROLES
        }
        warnings: List[str] = []
        if ledger.budget_remaining < 0:
            warnings.append(f"tracked budget is negative ({ledger.budget_remaining:g})")

        summaries.append(
            OpponentSummary(
                owner=owner,
                budget_remaining=ledger.budget_remaining,
                spent=sum(player.price for player in ledger.players),
                players_by_role={key: tuple(items) for key, items in grouped.items() if items},
                counts=counts,
                missing=missing,
                warnings=warnings,
            )
        )
    return summaries
