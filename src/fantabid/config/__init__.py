"""Configuration helpers for draft budgets and role targets."""

from .draft import (
    DEFAULT_BUDGET,
    DEFAULT_CAPS,
    DEFAULT_TARGETS,
    DEFAULT_TOP_K,
    DraftConfig,
    caps_from_amounts,
    caps_from_percentages,
    load_config,
)

__all__ = [
    "DEFAULT_BUDGET",
    "DEFAULT_CAPS",
    "DEFAULT_TARGETS",
    "DEFAULT_TOP_K",
    "DraftConfig",
    "caps_from_amounts",
    "caps_from_percentages",
    "load_config",
]
