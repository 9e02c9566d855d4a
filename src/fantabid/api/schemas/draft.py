from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from .player import PlayerResponse


class PickRequest(BaseModel):
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)


class UnavailableRequest(BaseModel):
    name: str = Field(..., min_length=1)
    price: float | None = Field(default=None, ge=0)
    owner: str | None = None


class MutationResponse(BaseModel):
    session_id: str
    budget_remaining: float
    picked_count: int
    unavailable_count: int
    warnings: List[str] = Field(default_factory=list)
    persisted: bool = True


class InitResponse(BaseModel):
    session_id: str
    total_rows: int
    loaded_players: int
    skipped_rows: List[str]
    budget: float
    top_k: int
    persisted: bool = True


class RoleSuggestionsResponse(BaseModel):
    standard: List[PlayerResponse]
    optimized: List[PlayerResponse]


class SuggestionsResponse(BaseModel):
    budget_remaining: float
    roles: Dict[str, RoleSuggestionsResponse]


class RoleBudgetResponse(BaseModel):
    cap: float
    spent: float
    remaining: float
    adjusted: bool
    picked_count: int
    target_count: int


class BudgetResponse(BaseModel):
    budget_total: float
    budget_remaining: float
    roles: Dict[str, RoleBudgetResponse]


class BalanceResponse(BaseModel):
    score: int
    band: str


class NeededResponse(BaseModel):
    needed: Dict[str, int]


class OpponentPlayerResponse(BaseModel):
    name: str
    price: float


class OpponentResponse(BaseModel):
    owner: str
    budget_remaining: float
    spent: float
    players_by_role: Dict[str, List[OpponentPlayerResponse]]
    counts: Dict[str, int]
    missing: Dict[str, int]
    warnings: List[str] = Field(default_factory=list)
