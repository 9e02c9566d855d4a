"""Role-relative player scoring."""

from .model import AGE_BAND_BONUS, PRIORITY_DIVISOR, age_band_bonus, compute_scores, z_scores

__all__ = [
    "AGE_BAND_BONUS",
    "PRIORITY_DIVISOR",
    "age_band_bonus",
    "compute_scores",
    "z_scores",
]
