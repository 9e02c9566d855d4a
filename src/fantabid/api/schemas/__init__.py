"""Pydantic models for API I/O."""

from .player import PlayerResponse, PlayerSearchResponse
from .draft import (
    BalanceResponse,
    BudgetResponse,
    InitResponse,
    MutationResponse,
    NeededResponse,
    OpponentPlayerResponse,
    OpponentResponse,
    PickRequest,
    RoleBudgetResponse,
    RoleSuggestionsResponse,
    SuggestionsResponse,
    UnavailableRequest,
)

__all__ = [
    "BalanceResponse",
    "BudgetResponse",
    "InitResponse",
    "MutationResponse",
    "NeededResponse",
    "OpponentPlayerResponse",
    "OpponentResponse",
    "PickRequest",
    "PlayerResponse",
    "PlayerSearchResponse",
    "RoleBudgetResponse",
    "RoleSuggestionsResponse",
    "SuggestionsResponse",
    "UnavailableRequest",
]
