"""Diagnostic score for how closely spend tracks the configured caps."""

from __future__ import annotations

from typing import Literal

from fantabid.models import ROLES

from .budget import role_spend
from .state import DraftState


BALANCE_START = 100
OVER_CAP_PENALTY = 10
UNDERSPEND_PENALTY = 5
UNDERSPEND_RATIO = 0.3


def balance_score(state: DraftState) -> int:
    score = BALANCE_START
    for role in ROLES:
        cap = state.config.cap(role)
        spent = role_spend(state, role)
        if spent > cap:
            score -= OVER_CAP_PENALTY
        if spent < cap * UNDERSPEND_RATIO:
            score -= UNDERSPEND_PENALTY
    return max(0, score)


def balance_band(score: int) -> Literal["good", "fair", "poor"]:
    if score >= 80:
        return "good"
    if score >= 60:
        return "fair"
    return "poor"
