from __future__ import annotations

from typing import List

from pydantic import BaseModel

from fantabid.models import Player


class PlayerResponse(BaseModel):
    name: str
    role: str
    team: str
    ageband: str
    base_value: float
    priority: int | None = None
    user_score: float | None = None
    score: float | None = None

    @classmethod
    def from_player(cls, player: Player) -> "PlayerResponse":
        return cls.model_validate(player.model_dump())


class PlayerSearchResponse(BaseModel):
    total: int
    players: List[PlayerResponse]
