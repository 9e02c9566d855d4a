"""Exceptions raised by the draft core."""

from __future__ import annotations


class FantabidError(Exception):
    """Base class for draft assistant errors."""


class NotFoundError(FantabidError, LookupError):
    """Raised when a pick references a player that is not in the roster pool."""

    def __init__(self, name: str, message: str | None = None):
        super().__init__(message or f"Player {name!r} not found in roster")
        self.name = name


class InvalidConfiguration(FantabidError, ValueError):
    """Raised when draft configuration is missing fields or carries bad values."""


class MalformedSnapshot(FantabidError, ValueError):
    """Raised when an imported draft snapshot cannot be rehydrated."""


__all__ = [
    "FantabidError",
    "NotFoundError",
    "InvalidConfiguration",
    "MalformedSnapshot",
]
