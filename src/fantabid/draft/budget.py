"""Per-role budget allowances with redistribution of cap overspend."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict

from fantabid.models import ROLES, Role

from .state import DraftState


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleBudget:
    """Budget figures for a single role."""

    role: Role
    cap: float
    spent: float
    remaining: float
    picked_count: int
    target_count: int
    adjusted: bool = False

    @property
    def excess(self) -> float:
        return max(0.0, self.spent - self.cap)


def role_spend(state: DraftState, role: Role) -> float:
    return sum(entry.price for entry in state.picked if entry.role == role)


def role_counts(state: DraftState) -> Dict[Role, int]:
    counts: Dict[Role, int] = {role: 0 for role in ROLES}
    for entry in state.picked:
        counts[entry.role] += 1
    return counts


def remaining_needed(state: DraftState) -> Dict[Role, int]:
    counts = role_counts(state)
    return {role: max(0, state.config.targets[role] - counts[role]) for role in ROLES}


def budget_breakdown(state: DraftState) -> Dict[Role, RoleBudget]:
    """Compute cap, spend and effective remaining allowance for each role.

    Overspend in any role is clamped to zero there and the summed excess is
    split evenly across roles that have no picks yet and still have room.
    No role is ever driven below zero.
    """

    counts = role_counts(state)
    budgets: Dict[Role, RoleBudget] = {}
    total_excess = 0.0

    for role in ROLES:
        cap = state.config.cap(role)
        spent = role_spend(state, role)
        remaining = cap - spent
        if remaining < 0:
            total_excess += abs(remaining)
            remaining = 0.0
        budgets[role] = RoleBudget(
            role=role,
            cap=cap,
            spent=spent,
            remaining=remaining,
            picked_count=counts[role],
            target_count=state.config.targets[role],
        )

    if total_excess <= 0:
        return budgets

    eligible = [
        role
        for role, budget in budgets.items()
        if budget.picked_count == 0 and budget.remaining > 0
    ]
    if not eligible:
        logger.debug("Excess %.2f has no eligible roles to absorb it", total_excess)
        return budgets

    share = total_excess / len(eligible)
    for role in eligible:
        budget = budgets[role]
        deduction = min(share, budget.remaining)
        budgets[role] = replace(budget, remaining=budget.remaining - deduction, adjusted=True)
    logger.debug(
        "Redistributed excess %.2f across %s", total_excess, ", ".join(eligible)
    )
    return budgets
