"""Persist and load draft configuration profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from fantabid.config import DraftConfig, load_config
from fantabid.errors import InvalidConfiguration


@dataclass
class ConfigProfile:
    settings: Dict[str, Any] = field(default_factory=dict)
    roster_mapping: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "ConfigProfile":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise InvalidConfiguration(f"{path} is not valid JSON: {exc}") from exc
        return cls(
            settings=data.get("settings", {}),
            roster_mapping=data.get("roster_mapping", {}),
        )

    def save(self, path: Path) -> None:
        payload = {
            "settings": self.settings,
            "roster_mapping": self.roster_mapping,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def to_config(self) -> DraftConfig:
        return load_config(self.settings)
