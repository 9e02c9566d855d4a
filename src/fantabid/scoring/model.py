"""Normalize raw valuations into scores comparable within a role."""

from __future__ import annotations

import logging
from collections import defaultdict
from statistics import fmean, pstdev
from typing import Iterable, List, Mapping, Sequence

from fantabid.config.draft import DEFAULT_USER_SCORE_WEIGHT
from fantabid.models import AGE_BANDS, Player, Role


logger = logging.getLogger(__name__)

AGE_BAND_BONUS: Mapping[str, float] = dict(zip(AGE_BANDS, (0.10, 0.07, 0.05, 0.02, 0.00, -0.02)))

PRIORITY_DIVISOR = 50.0


def z_scores(values: Sequence[float]) -> List[float]:
    """Population z-scores; a zero spread is replaced by 1."""

    if not values:
        return []
    mean = fmean(values)
    std = pstdev(values, mu=mean) or 1.0
    return [(value - mean) / std for value in values]


def age_band_bonus(ageband: str) -> float:
    return AGE_BAND_BONUS.get(ageband.strip().upper(), 0.0)


def _adjusted_score(player: Player, z: float, user_score_weight: float) -> float:
    score = z + age_band_bonus(player.ageband)
    if player.priority is not None:
        score -= player.priority / PRIORITY_DIVISOR
    if player.user_score is not None:
        score += user_score_weight * player.user_score
    return score


def compute_scores(
    players: Iterable[Player],
    *,
    user_score_weight: float = DEFAULT_USER_SCORE_WEIGHT,
) -> List[Player]:
    """Return a copy of ``players`` with ``score`` set, preserving input order.

    Scores are z-scores of ``base_value`` taken within each role, plus the
    age-band bonus, the priority adjustment and the weighted user score.
    They are only comparable between players sharing a role.
    """

    roster = list(players)
    by_role: dict[Role, list[int]] = defaultdict(list)
    for index, player in enumerate(roster):
        by_role[player.role].append(index)

    scored: list[Player | None] = [None] * len(roster)
    for role, indexes in by_role.items():
        values = [roster[index].base_value for index in indexes]
        for index, z in zip(indexes, z_scores(values)):
            player = roster[index]
            scored[index] = player.model_copy(
                update={"score": _adjusted_score(player, z, user_score_weight)}
            )
        logger.debug("Scored %d %s players", len(indexes), role)

    return [player for player in scored if player is not None]
