"""Draft configuration: total budget, per-role targets and cap fractions."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.config import ConfigDict

from fantabid.errors import InvalidConfiguration
from fantabid.models import ROLES, Role, normalize_role


DEFAULT_BUDGET = 200.0
DEFAULT_TOP_K = 6
DEFAULT_USER_SCORE_WEIGHT = 0.5

DEFAULT_TARGETS: Mapping[Role, int] = {
    "goalkeeper": 3,
    "defender": 8,
    "midfielder": 8,
    "attacker": 6,
}

DEFAULT_CAPS: Mapping[Role, float] = {
    "goalkeeper": 0.10,
    "defender": 0.25,
    "midfielder": 0.35,
    "attacker": 0.30,
}


def _role_keyed(value: Any) -> Any:
    if not isinstance(value, Mapping):
        return value
    resolved: dict[Role, Any] = {}
    for key, item in value.items():
        resolved[normalize_role(key)] = item
    missing = [role for role in ROLES if role not in resolved]
    if missing:
        raise ValueError(f"missing roles: {', '.join(missing)}")
    return resolved


class DraftConfig(BaseModel):
    """Immutable session configuration supplied at initialization."""

    budget: float = Field(default=DEFAULT_BUDGET, gt=0)
    targets: Dict[Role, int] = Field(default_factory=lambda: dict(DEFAULT_TARGETS))
    caps: Dict[Role, float] = Field(default_factory=lambda: dict(DEFAULT_CAPS))
    user_score_weight: float = DEFAULT_USER_SCORE_WEIGHT
    top_k: int = Field(default=DEFAULT_TOP_K, ge=1)

    model_config = ConfigDict(frozen=True)

    @field_validator("targets", "caps", mode="before")
    @classmethod
    def _normalize_roles(cls, value: Any) -> Any:
        return _role_keyed(value)

    @field_validator("targets")
    @classmethod
    def _positive_targets(cls, value: Dict[Role, int]) -> Dict[Role, int]:
        for role, count in value.items():
            if count <= 0:
                raise ValueError(f"target for {role} must be positive, got {count}")
        return value

    @field_validator("caps")
    @classmethod
    def _non_negative_caps(cls, value: Dict[Role, float]) -> Dict[Role, float]:
        for role, fraction in value.items():
            if fraction < 0:
                raise ValueError(f"cap for {role} must be non-negative, got {fraction}")
        return value

    def cap(self, role: Role) -> float:
        return self.budget * self.caps[role]


def load_config(data: Mapping[str, Any] | DraftConfig | None = None) -> DraftConfig:
    """Validate raw settings into a :class:`DraftConfig`.

    Accepts a mapping (form fields, CLI flags, JSON profile) or an existing
    config. Any validation problem surfaces as :class:`InvalidConfiguration`.
    """

    if isinstance(data, DraftConfig):
        return data
    try:
        return DraftConfig.model_validate(dict(data or {}))
    except (ValidationError, TypeError) as exc:
        raise InvalidConfiguration(str(exc)) from exc


def caps_from_percentages(percentages: Mapping[str, float]) -> dict[Role, float]:
    """Convert whole-number percentages into cap fractions; they must sum to 100."""

    try:
        resolved = _role_keyed(percentages)
    except ValueError as exc:
        raise InvalidConfiguration(str(exc)) from exc
    total = sum(float(value) for value in resolved.values())
    if abs(total - 100.0) > 1e-6:
        raise InvalidConfiguration(f"cap percentages must sum to 100 (got {total:g})")
    return {role: float(resolved[role]) / 100.0 for role in ROLES}


def caps_from_amounts(amounts: Mapping[str, float], *, budget: float) -> dict[Role, float]:
    """Convert absolute credit caps into fractions of ``budget``."""

    if budget <= 0:
        raise InvalidConfiguration(f"budget must be positive (got {budget:g})")
    try:
        resolved = _role_keyed(amounts)
    except ValueError as exc:
        raise InvalidConfiguration(str(exc)) from exc
    total = sum(float(value) for value in resolved.values())
    if total > budget:
        raise InvalidConfiguration(
            f"sum of role caps ({total:g}) exceeds total budget ({budget:g})"
        )
    return {role: float(resolved[role]) / budget for role in ROLES}
