"""Draft state, budget allocation and suggestion engine."""

from .balance import balance_band, balance_score
from .budget import RoleBudget, budget_breakdown, remaining_needed, role_counts, role_spend
from .opponents import OpponentSummary, opponent_summary
from .service import cap_warning, initialize, mark_unavailable, opponent_warning, pick
from .state import (
    DraftState,
    OpponentLedger,
    OpponentPlayer,
    PickedEntry,
    UnavailableEntry,
    from_snapshot,
    to_snapshot,
)
from .suggestions import RoleSuggestions, available_pool, get_suggestions, rank_players, top_by_role

__all__ = [
    "DraftState",
    "OpponentLedger",
    "OpponentPlayer",
    "OpponentSummary",
    "PickedEntry",
    "RoleBudget",
    "RoleSuggestions",
    "UnavailableEntry",
    "available_pool",
    "balance_band",
    "balance_score",
    "budget_breakdown",
    "cap_warning",
    "from_snapshot",
    "get_suggestions",
    "initialize",
    "mark_unavailable",
    "opponent_summary",
    "opponent_warning",
    "pick",
    "rank_players",
    "remaining_needed",
    "role_counts",
    "role_spend",
    "to_snapshot",
    "top_by_role",
]
