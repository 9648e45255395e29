"""Leveling curve and experience awards.

Only the pure curve is re-exported here; the award engine lives in
``src.core.leveling.engine`` because it depends on the contracts package,
which itself derives level brackets from this curve.
"""

from .curve import (
    BASE_LEVEL_COST,
    LEVEL_COST_GROWTH,
    cumulative_experience_for,
    level_cost,
    level_for_experience,
)

__all__ = [
    "BASE_LEVEL_COST",
    "LEVEL_COST_GROWTH",
    "cumulative_experience_for",
    "level_cost",
    "level_for_experience",
]
