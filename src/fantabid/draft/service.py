"""Draft lifecycle: initialization and the two append-only mutations."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from fantabid.config import DraftConfig, load_config
from fantabid.errors import NotFoundError
from fantabid.models import Player, Role, name_key
from fantabid.scoring import compute_scores

from .budget import role_spend
from .state import DraftState, OpponentLedger, OpponentPlayer, PickedEntry, UnavailableEntry


logger = logging.getLogger(__name__)


def initialize(
    roster: Iterable[Player],
    config: DraftConfig | Mapping[str, Any] | None = None,
) -> DraftState:
    """Score ``roster`` and start a fresh draft.

    Configuration is validated before anything else so a bad config never
    produces a partial state.
    """

    resolved = load_config(config)
    scored = compute_scores(roster, user_score_weight=resolved.user_score_weight)
    logger.info(
        "Initialized draft with %d players, budget %.0f", len(scored), resolved.budget
    )
    return DraftState(
        config=resolved,
        roster=tuple(scored),
        budget_remaining=resolved.budget,
    )


def cap_warning(state: DraftState, role: Role) -> Optional[str]:
    cap = state.config.cap(role)
    spent = role_spend(state, role)
    if spent > cap:
        return f"Over the {role} cap: spent {spent:g} of {cap:.1f}"
    return None


def opponent_warning(state: DraftState, owner: str) -> Optional[str]:
    ledger = state.opponents.get(owner)
    if ledger is not None and ledger.budget_remaining < 0:
        return f"{owner} has a negative tracked budget ({ledger.budget_remaining:g})"
    return None


def pick(state: DraftState, name: str, price: float) -> DraftState:
    """Record a purchase of a roster player by the operator.

    The role and canonical name come from the matched roster entry. Going
    over the role cap is advisory only; the pick is always recorded.
    """

    player = state.find_player(name)
    if player is None:
        raise NotFoundError(name)
    if not state.is_available(player.name):
        raise NotFoundError(name, f"Player {player.name!r} has already been taken")

    entry = PickedEntry(name=player.name, role=player.role, price=price)
    updated = state.model_copy(
        update={
            "picked": state.picked + (entry,),
            "budget_remaining": max(0.0, state.budget_remaining - price),
        }
    )
    logger.info("Picked %s (%s) for %g", player.name, player.role, price)
    warning = cap_warning(updated, player.role)
    if warning:
        logger.warning("%s", warning)
    return updated


def mark_unavailable(
    state: DraftState,
    name: str,
    price: float | None = None,
    owner: str | None = None,
) -> DraftState:
    """Record a player taken by someone else.

    The name does not need to match the roster. When ``owner`` is given the
    opponent's tracked budget is debited; it is allowed to go negative.
    """

    if any(name_key(entry.name) == name_key(name) for entry in state.picked):
        logger.warning("%s is already on our roster; not marking unavailable", name)
        return state

    owner = owner.strip() if owner else None
    entry = UnavailableEntry(name=name, price=price, owner=owner or None)
    update: dict[str, Any] = {"unavailable": state.unavailable + (entry,)}

    if owner:
        opponents = dict(state.opponents)
        ledger = opponents.get(owner) or OpponentLedger(budget_remaining=state.config.budget)
        spent = price or 0.0
        opponents[owner] = OpponentLedger(
            budget_remaining=ledger.budget_remaining - spent,
            players=ledger.players + (OpponentPlayer(name=name, price=spent),),
        )
        update["opponents"] = opponents

    updated = state.model_copy(update=update)
    logger.info("Marked %s unavailable (owner=%s, price=%s)", name, owner, price)
    if owner:
        warning = opponent_warning(updated, owner)
        if warning:
            logger.warning("%s", warning)
    return updated
