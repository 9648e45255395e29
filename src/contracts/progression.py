"""
Progression service contracts: change notifications and per-match reports.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import Field

from .achievements import TierCrossing
from .common import BaseContract
from .experience import ExperienceAward, ExperienceState
from .insights import InsightsResult


class ProgressChangeKind(str, Enum):
    """What part of a profile changed."""

    EXPERIENCE = "experience"
    ACHIEVEMENTS = "achievements"
    RESET = "reset"


class ProgressChangedEvent(BaseContract):
    """Announcement that a profile's derived display state should refresh."""

    profile_id: str = Field(..., min_length=1)
    kind: ProgressChangeKind
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    leveled_up: bool = False
    crossings: tuple[TierCrossing, ...] = Field(default_factory=tuple)


class MatchProgressReport(BaseContract):
    """Everything a finished match produced for one profile."""

    profile_id: str
    match_id: str
    insights: InsightsResult | None = None
    experience_award: ExperienceAward
    experience: ExperienceState
    crossings: tuple[TierCrossing, ...] = Field(default_factory=tuple)
    achievement_points_gained: int = Field(0, ge=0)
    total_achievement_points: int = Field(0, ge=0)
