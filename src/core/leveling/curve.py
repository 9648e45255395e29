"""Geometric leveling curve.

Reaching level 2 costs 100 experience and every later step costs 1.5 times
the previous one, truncated to an integer at each step. Everything here is a
pure function of its argument so a level can always be recomputed from total
experience alone.
"""

from __future__ import annotations

from functools import lru_cache

BASE_LEVEL_COST = 100
LEVEL_COST_GROWTH = 1.5


@lru_cache(maxsize=256)
def level_cost(level: int) -> int:
    """Experience needed to go from ``level`` to ``level + 1``."""

    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    cost = BASE_LEVEL_COST
    for _ in range(level - 1):
        cost = int(cost * LEVEL_COST_GROWTH)
    return cost


def cumulative_experience_for(level: int) -> int:
    """Total experience required to reach ``level`` (0 for level 1)."""

    if level <= 1:
        return 0
    return sum(level_cost(step) for step in range(1, level))


def level_for_experience(total_experience: int) -> int:
    """The unique level whose bracket contains ``total_experience``."""

    level = 1
    while total_experience >= cumulative_experience_for(level + 1):
        level += 1
    return level
