"""Achievement catalog, progress tracking and history evaluation."""

from .catalog import (
    ACHIEVEMENT_CATALOG,
    POINT_OVERRIDES,
    UnknownAchievementError,
    definition_for,
    points_for,
    top_achievements,
    total_points,
)
from .evaluator import daily_streak, evaluate_counters
from .tracker import (
    apply_progress,
    apply_progress_batch,
    highest_tier_reached,
    reset_progress,
)

__all__ = [
    "ACHIEVEMENT_CATALOG",
    "POINT_OVERRIDES",
    "UnknownAchievementError",
    "apply_progress",
    "apply_progress_batch",
    "daily_streak",
    "definition_for",
    "evaluate_counters",
    "highest_tier_reached",
    "points_for",
    "reset_progress",
    "top_achievements",
    "total_points",
]
