"""Contract models for data validation."""

from .achievements import (
    AchievementCategory,
    AchievementDefinition,
    AchievementId,
    AchievementProgress,
    AchievementRequirement,
    AchievementTier,
    ProgressBatchResult,
    ProgressUpdate,
    TierCrossing,
)
from .common import DoublesServerRole, GameType, MatchOutcome, ShotType, Side, Sport
from .events import PointEvent
from .experience import (
    ExperienceAward,
    ExperienceAwardLine,
    ExperienceAwardResult,
    ExperienceState,
)
from .insights import (
    ClutchInsights,
    HighlightKind,
    InsightsResult,
    KeyMoment,
    MatchStory,
    MomentumInsights,
    ServeInsights,
    StoryType,
)
from .match import MatchRecord
from .progression import MatchProgressReport, ProgressChangedEvent, ProgressChangeKind

__all__ = [
    "AchievementCategory",
    "AchievementDefinition",
    "AchievementId",
    "AchievementProgress",
    "AchievementRequirement",
    "AchievementTier",
    "ProgressBatchResult",
    "ProgressUpdate",
    "TierCrossing",
    "DoublesServerRole",
    "GameType",
    "MatchOutcome",
    "ShotType",
    "Side",
    "Sport",
    "PointEvent",
    "ExperienceAward",
    "ExperienceAwardLine",
    "ExperienceAwardResult",
    "ExperienceState",
    "ClutchInsights",
    "HighlightKind",
    "InsightsResult",
    "KeyMoment",
    "MatchStory",
    "MomentumInsights",
    "ServeInsights",
    "StoryType",
    "MatchRecord",
    "MatchProgressReport",
    "ProgressChangedEvent",
    "ProgressChangeKind",
]
