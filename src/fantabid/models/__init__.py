"""Canonical player models shared across ingestion, scoring and draft layers."""

from .player import AGE_BANDS, ROLE_ALIASES, ROLES, Player, Role, name_key, normalize_role

__all__ = [
    "AGE_BANDS",
    "ROLE_ALIASES",
    "ROLES",
    "Player",
    "Role",
    "name_key",
    "normalize_role",
]
