"""
Achievement contracts: tiers, definitions, and per-player progress records.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import Field, model_validator

from .common import BaseContract


class AchievementTier(int, Enum):
    """Five increasing severity ranks."""

    REGULAR = 1
    BRONZE = 2
    SILVER = 3
    GOLD = 4
    PLATINUM = 5

    @property
    def points(self) -> int:
        """Points for fully achieving this rank."""
        return _TIER_POINTS[self]

    @property
    def label(self) -> str:
        return self.name.title()


_TIER_POINTS: dict[AchievementTier, int] = {
    AchievementTier.REGULAR: 10,
    AchievementTier.BRONZE: 25,
    AchievementTier.SILVER: 50,
    AchievementTier.GOLD: 100,
    AchievementTier.PLATINUM: 200,
}


class AchievementCategory(str, Enum):
    """Achievement groupings."""

    UNIVERSAL = "Universal"
    TIME_BASED = "Time-Based"
    PERFORMANCE = "Performance"
    ACTIVITY = "Activity"
    MILESTONES = "Milestones"
    PICKLEBALL = "Pickleball"
    TENNIS = "Tennis"
    PADEL = "Padel"


class AchievementId(str, Enum):
    """Closed set of achievement identifiers known at build time."""

    # Universal
    GAMES_PLAYED = "games_played"
    DAILY_STREAK = "daily_streak"
    VICTORIES = "victories"
    COMEBACKS = "comebacks"

    # Time-based
    EARLY_BIRD = "early_bird"
    NIGHT_OWL = "night_owl"
    WEEKEND_WARRIOR = "weekend_warrior"
    ANNIVERSARY_WIN = "anniversary_win"
    HOLIDAY_HUSTLE = "holiday_hustle"
    NEW_YEAR_CHAMPION = "new_year_champion"

    # Performance
    PERFECT_START = "perfect_start"
    CLEAN_SWEEP = "clean_sweep"
    MARATHON_MATCH = "marathon_match"
    SPEED_DEMON = "speed_demon"
    DEUCE_MASTER = "deuce_master"

    # Activity
    TOURNAMENT_READY = "tournament_ready"
    CROSS_SPORT = "cross_sport"

    # Milestones
    CENTURY_CLUB = "century_club"
    ONE_YEAR_STRONG = "one_year_strong"
    RATING_CLIMBER = "rating_climber"
    DIAMOND_HANDS = "diamond_hands"

    # Pickleball
    PB_VICTORIES = "pb_victories"
    PICKLER = "pickler"  # 11-0 wins given
    PICKLED = "pickled"  # 0-11 losses received

    # Tennis
    TENNIS_VICTORIES = "tennis_victories"
    BAGEL_BARON = "bagel_baron"  # 6-0 sets won
    TIEBREAK_TITAN = "tiebreak_titan"

    # Padel
    PADEL_VICTORIES = "padel_victories"
    ROSCO_ROYALTY = "rosco_royalty"  # 6-0 sets in padel


class AchievementRequirement(BaseContract):
    """Threshold a counter must reach for one tier."""

    threshold: int = Field(..., ge=0)
    description: str


class AchievementDefinition(BaseContract):
    """Static description of one achievement and its tier ladder."""

    identifier: AchievementId
    category: AchievementCategory
    name: str
    tiers: dict[AchievementTier, AchievementRequirement]

    @model_validator(mode="after")
    def _require_tiers(self) -> "AchievementDefinition":
        if not self.tiers:
            raise ValueError(f"{self.identifier.value} defines no tiers")
        return self

    @property
    def ordered_tiers(self) -> list[tuple[AchievementTier, AchievementRequirement]]:
        """Defined tiers in increasing severity."""
        return sorted(self.tiers.items(), key=lambda item: item[0])

    @property
    def top_tier(self) -> AchievementTier:
        return max(self.tiers)

    @property
    def is_single_tier(self) -> bool:
        return len(self.tiers) == 1


class AchievementProgress(BaseContract):
    """Accumulated progress for one identifier."""

    identifier: AchievementId
    current_value: int = Field(0, ge=0)
    highest_tier_achieved: AchievementTier | None = None
    date_last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))


class TierCrossing(BaseContract):
    """A tier reached for the first time."""

    identifier: AchievementId
    tier: AchievementTier
    previous_tier: AchievementTier | None = None
    points: int = Field(..., ge=0, description="Points to add to the running total, once")


class ProgressUpdate(BaseContract):
    """Result of applying one observed counter value."""

    record: AchievementProgress
    crossing: TierCrossing | None = None
    changed: bool = False


class ProgressBatchResult(BaseContract):
    """Result of applying several counters against one progress map."""

    progress: dict[AchievementId, AchievementProgress]
    updated_identifiers: tuple[AchievementId, ...] = Field(default_factory=tuple)
    crossings: tuple[TierCrossing, ...] = Field(default_factory=tuple)
    points_gained: int = Field(0, ge=0)

    @property
    def changed(self) -> bool:
        return bool(self.updated_identifiers)
