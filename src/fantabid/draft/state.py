"""Draft state models and snapshot round-tripping."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.config import ConfigDict

from fantabid.config import DraftConfig
from fantabid.errors import MalformedSnapshot
from fantabid.models import Player, Role, name_key


SNAPSHOT_FIELDS: Tuple[str, ...] = (
    "config",
    "roster",
    "budget_remaining",
    "picked",
    "unavailable",
    "opponents",
)


class PickedEntry(BaseModel):
    name: str
    role: Role
    price: float = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class UnavailableEntry(BaseModel):
    """Player taken by someone else; the name may be outside the roster."""

    name: str
    price: Optional[float] = None
    owner: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class OpponentPlayer(BaseModel):
    name: str
    price: float

    model_config = ConfigDict(frozen=True)


class OpponentLedger(BaseModel):
    """Observed spend for one opposing manager; the budget may go negative."""

    budget_remaining: float
    players: Tuple[OpponentPlayer, ...] = ()

    model_config = ConfigDict(frozen=True)


class DraftState(BaseModel):
    """Everything a draft session needs: config, scored roster and picks so far.

    Instances are never mutated in place; the operations in
    :mod:`fantabid.draft.service` return updated copies.
    """

    config: DraftConfig
    roster: Tuple[Player, ...]
    budget_remaining: float
    picked: Tuple[PickedEntry, ...] = ()
    unavailable: Tuple[UnavailableEntry, ...] = ()
    opponents: Dict[str, OpponentLedger] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("unavailable", mode="before")
    @classmethod
    def _coerce_bare_names(cls, value: Any) -> Any:
        # Older snapshots store some unavailable entries as plain names.
        if isinstance(value, (list, tuple)):
            return tuple({"name": item} if isinstance(item, str) else item for item in value)
        return value

    def find_player(self, name: str) -> Player | None:
        key = name_key(name)
        for player in self.roster:
            if player.key == key:
                return player
        return None

    def taken_keys(self) -> set[str]:
        keys = {name_key(entry.name) for entry in self.picked}
        keys.update(name_key(entry.name) for entry in self.unavailable)
        return keys

    def is_available(self, name: str) -> bool:
        return name_key(name) not in self.taken_keys()


def to_snapshot(state: DraftState) -> dict[str, Any]:
    """Serialize ``state`` to a JSON-compatible mapping."""

    return state.model_dump(mode="json")


def from_snapshot(data: Mapping[str, Any]) -> DraftState:
    """Rehydrate a snapshot produced by :func:`to_snapshot`.

    Raises :class:`MalformedSnapshot` when required top-level fields are
    missing or any field fails validation.
    """

    if not isinstance(data, Mapping):
        raise MalformedSnapshot("snapshot must be a JSON object")
    missing = [field for field in SNAPSHOT_FIELDS if field not in data]
    if missing:
        raise MalformedSnapshot(f"snapshot missing required fields: {', '.join(missing)}")
    try:
        return DraftState.model_validate(dict(data))
    except ValidationError as exc:
        raise MalformedSnapshot(str(exc)) from exc
