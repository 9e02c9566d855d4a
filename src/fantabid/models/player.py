"""Player records consumed by the scoring model and the draft engine."""

from __future__ import annotations

from typing import Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


Role = Literal["goalkeeper", "defender", "midfielder", "attacker"]

ROLES: Tuple[Role, ...] = ("goalkeeper", "defender", "midfielder", "attacker")

# Short codes used by the Italian roster exports (P/D/C/A).
ROLE_ALIASES: dict[str, Role] = {
    "p": "goalkeeper",
    "por": "goalkeeper",
    "gk": "goalkeeper",
    "goalkeeper": "goalkeeper",
    "d": "defender",
    "dif": "defender",
    "def": "defender",
    "defender": "defender",
    "c": "midfielder",
    "cen": "midfielder",
    "mid": "midfielder",
    "midfielder": "midfielder",
    "a": "attacker",
    "att": "attacker",
    "fw": "attacker",
    "attacker": "attacker",
}

# Youngest first; used by the under-age bonus table.
AGE_BANDS: Tuple[str, ...] = ("U21", "U23", "U25", "U28", "U30", "O30")


def name_key(name: str) -> str:
    """Case- and whitespace-insensitive key used to match player names."""

    return name.strip().casefold()


def normalize_role(value: str) -> Role:
    """Resolve a long role name or short code to its canonical role."""

    key = str(value).strip().lower()
    if key not in ROLE_ALIASES:
        raise ValueError(f"Unknown role {value!r}")
    return ROLE_ALIASES[key]


class Player(BaseModel):
    """Single roster entry; ``score`` is filled in by the scoring model."""

    name: str = Field(..., min_length=1)
    role: Role
    team: str = ""
    ageband: str = ""
    base_value: float = Field(default=0.0, allow_inf_nan=False)
    priority: Optional[int] = None
    user_score: Optional[float] = Field(default=None, allow_inf_nan=False)
    score: Optional[float] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("role", mode="before")
    @classmethod
    def _coerce_role(cls, value: object) -> object:
        if isinstance(value, str):
            return normalize_role(value)
        return value

    @field_validator("ageband", mode="before")
    @classmethod
    def _coerce_ageband(cls, value: object) -> object:
        if value is None:
            return ""
        return str(value).strip().upper()

    @property
    def key(self) -> str:
        return name_key(self.name)
