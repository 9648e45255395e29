"""Static achievement catalog.

Every ``AchievementId`` has exactly one definition; the registry is built once
at import time and exposed read-only. Point values are derived here so the
tracker and the totals agree on how a tier is scored.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from src.contracts.achievements import (
    AchievementCategory,
    AchievementDefinition,
    AchievementId,
    AchievementProgress,
    AchievementRequirement,
    AchievementTier,
)
from src.core.errors import PointEngineError

logger = logging.getLogger(__name__)

R, B, S, G, P = (
    AchievementTier.REGULAR,
    AchievementTier.BRONZE,
    AchievementTier.SILVER,
    AchievementTier.GOLD,
    AchievementTier.PLATINUM,
)


class UnknownAchievementError(PointEngineError, KeyError):
    """Raised for an identifier with no catalog entry (a programming error)."""


def _define(
    identifier: AchievementId,
    category: AchievementCategory,
    name: str,
    tiers: dict[AchievementTier, tuple[int, str]],
) -> AchievementDefinition:
    return AchievementDefinition(
        identifier=identifier,
        category=category,
        name=name,
        tiers={
            tier: AchievementRequirement(threshold=threshold, description=description)
            for tier, (threshold, description) in tiers.items()
        },
    )


def _ladder(thresholds: tuple[int, ...], template: str, first: str | None = None) -> dict:
    """Standard ladder starting at Regular; ``template`` is formatted with the threshold."""
    ladder: dict[AchievementTier, tuple[int, str]] = {}
    for tier, threshold in zip((R, B, S, G, P), thresholds):
        ladder[tier] = (threshold, template.format(threshold))
    if first is not None:
        ladder[R] = (thresholds[0], first)
    return ladder


_DEFINITIONS: tuple[AchievementDefinition, ...] = (
    # Universal
    _define(
        AchievementId.GAMES_PLAYED,
        AchievementCategory.UNIVERSAL,
        "Games Played",
        _ladder((5, 25, 50, 100, 250), "Play {} games"),
    ),
    _define(
        AchievementId.DAILY_STREAK,
        AchievementCategory.UNIVERSAL,
        "Daily Player",
        _ladder((2, 3, 7, 14, 30), "{} day streak"),
    ),
    _define(
        AchievementId.VICTORIES,
        AchievementCategory.UNIVERSAL,
        "Victory Milestone",
        _ladder((5, 25, 50, 100, 250), "Win {} games"),
    ),
    _define(
        AchievementId.COMEBACKS,
        AchievementCategory.UNIVERSAL,
        "Comeback King",
        _ladder((1, 5, 10, 25, 50), "{} comebacks", first="Win after being down 5+ points"),
    ),
    # Time-based
    _define(
        AchievementId.EARLY_BIRD,
        AchievementCategory.TIME_BASED,
        "Early Bird",
        {S: (1, "Win a game before 7 AM")},
    ),
    _define(
        AchievementId.NIGHT_OWL,
        AchievementCategory.TIME_BASED,
        "Night Owl",
        {S: (1, "Win a game after 10 PM")},
    ),
    _define(
        AchievementId.WEEKEND_WARRIOR,
        AchievementCategory.TIME_BASED,
        "Weekend Warrior",
        {B: (5, "Play 5 games on weekends")},
    ),
    _define(
        AchievementId.ANNIVERSARY_WIN,
        AchievementCategory.TIME_BASED,
        "Anniversary Win",
        {G: (1, "Win on app anniversary")},
    ),
    _define(
        AchievementId.HOLIDAY_HUSTLE,
        AchievementCategory.TIME_BASED,
        "Holiday Hustle",
        {S: (1, "Play on a major holiday")},
    ),
    _define(
        AchievementId.NEW_YEAR_CHAMPION,
        AchievementCategory.TIME_BASED,
        "New Year Champion",
        {G: (1, "Win your first game of the year")},
    ),
    # Performance
    _define(
        AchievementId.PERFECT_START,
        AchievementCategory.PERFORMANCE,
        "Perfect Start",
        {G: (1, "Win without losing first 3 points")},
    ),
    _define(
        AchievementId.CLEAN_SWEEP,
        AchievementCategory.PERFORMANCE,
        "Clean Sweep",
        {S: (1, "Win 3 games in one day")},
    ),
    _define(
        AchievementId.MARATHON_MATCH,
        AchievementCategory.PERFORMANCE,
        "Marathon Match",
        {G: (1, "Play a game lasting 45+ minutes")},
    ),
    _define(
        AchievementId.SPEED_DEMON,
        AchievementCategory.PERFORMANCE,
        "Speed Demon",
        {S: (1, "Win a game in under 10 minutes")},
    ),
    _define(
        AchievementId.DEUCE_MASTER,
        AchievementCategory.PERFORMANCE,
        "Deuce Master",
        {G: (1, "Win 5 consecutive deuce points")},
    ),
    # Activity
    _define(
        AchievementId.TOURNAMENT_READY,
        AchievementCategory.ACTIVITY,
        "Tournament Ready",
        {G: (1, "Complete 10 games in one week")},
    ),
    _define(
        AchievementId.CROSS_SPORT,
        AchievementCategory.ACTIVITY,
        "Cross-Sport Athlete",
        {S: (3, "Play all three sports")},
    ),
    # Milestones
    _define(
        AchievementId.CENTURY_CLUB,
        AchievementCategory.MILESTONES,
        "Century Club",
        {S: (100, "Score 100 points total")},
    ),
    _define(
        AchievementId.ONE_YEAR_STRONG,
        AchievementCategory.MILESTONES,
        "One Year Strong",
        {P: (1, "Use app for full year")},
    ),
    _define(
        AchievementId.RATING_CLIMBER,
        AchievementCategory.MILESTONES,
        "Rating Climber",
        {G: (1, "Improve rating by 0.5+")},
    ),
    _define(
        AchievementId.DIAMOND_HANDS,
        AchievementCategory.MILESTONES,
        "Diamond Hands",
        {P: (100, "100-day streak")},
    ),
    # Pickleball
    _define(
        AchievementId.PB_VICTORIES,
        AchievementCategory.PICKLEBALL,
        "PB Victory Milestone",
        _ladder((5, 25, 50, 100, 250), "Win {} pickleball games"),
    ),
    _define(
        AchievementId.PICKLER,
        AchievementCategory.PICKLEBALL,
        "Pickler",
        _ladder((1, 3, 5, 10, 25), "Give {} pickles", first="Give 1 pickle (11-0)"),
    ),
    _define(
        AchievementId.PICKLED,
        AchievementCategory.PICKLEBALL,
        "Pickled",
        _ladder((1, 3, 5), "Get pickled {} times", first="Get pickled (lose 0-11)"),
    ),
    # Tennis
    _define(
        AchievementId.TENNIS_VICTORIES,
        AchievementCategory.TENNIS,
        "Tennis Victory Milestone",
        _ladder((5, 25, 50, 100, 250), "Win {} tennis games"),
    ),
    _define(
        AchievementId.BAGEL_BARON,
        AchievementCategory.TENNIS,
        "Bagel Baron",
        _ladder((1, 3, 5, 10, 25), "Win {} bagel sets", first="Win a 6-0 set"),
    ),
    _define(
        AchievementId.TIEBREAK_TITAN,
        AchievementCategory.TENNIS,
        "Tiebreak Titan",
        _ladder((1, 5, 10, 25), "Win {} tiebreaks", first="Win 1 tiebreak"),
    ),
    # Padel
    _define(
        AchievementId.PADEL_VICTORIES,
        AchievementCategory.PADEL,
        "Padel Victory Milestone",
        _ladder((5, 25, 50, 100, 250), "Win {} padel games"),
    ),
    _define(
        AchievementId.ROSCO_ROYALTY,
        AchievementCategory.PADEL,
        "Rosco Royalty",
        _ladder((1, 3, 5, 10), "Win {} roscos", first="Win a 6-0 set"),
    ),
)

ACHIEVEMENT_CATALOG: Mapping[AchievementId, AchievementDefinition] = MappingProxyType(
    {definition.identifier: definition for definition in _DEFINITIONS}
)

# Flat awards that replace the tier arithmetic once the top tier is reached
POINT_OVERRIDES: Mapping[AchievementId, int] = MappingProxyType({AchievementId.DIAMOND_HANDS: 500})


def definition_for(
    identifier: AchievementId,
    catalog: Mapping[AchievementId, AchievementDefinition] = ACHIEVEMENT_CATALOG,
) -> AchievementDefinition:
    """Look up a definition, raising ``UnknownAchievementError`` when absent."""

    try:
        return catalog[AchievementId(identifier)]
    except (KeyError, ValueError) as exc:
        raise UnknownAchievementError(identifier) from exc


def points_for(
    identifier: AchievementId,
    tier: AchievementTier | None,
    catalog: Mapping[AchievementId, AchievementDefinition] = ACHIEVEMENT_CATALOG,
) -> int:
    """Cumulative points a profile holds for reaching ``tier`` of ``identifier``.

    Single-tier achievements earn that tier's points. Multi-tier achievements
    earn every rank's points up to and including ``tier``, so walking a ladder
    one rung at a time adds up to the same total as jumping straight to the top.
    """

    if tier is None:
        return 0

    definition = definition_for(identifier, catalog)
    override = POINT_OVERRIDES.get(definition.identifier)
    if override is not None and tier >= definition.top_tier:
        return override

    if definition.is_single_tier:
        return tier.points
    return sum(rank.points for rank in AchievementTier if rank <= tier)


def total_points(
    progress: Mapping[AchievementId, AchievementProgress],
    catalog: Mapping[AchievementId, AchievementDefinition] = ACHIEVEMENT_CATALOG,
) -> int:
    """Sum of ``points_for`` over every record that has reached a tier."""

    return sum(
        points_for(identifier, record.highest_tier_achieved, catalog)
        for identifier, record in progress.items()
        if record.highest_tier_achieved is not None
    )


def top_achievements(
    progress: Mapping[AchievementId, AchievementProgress],
    count: int = 5,
    catalog: Mapping[AchievementId, AchievementDefinition] = ACHIEVEMENT_CATALOG,
) -> list[tuple[AchievementDefinition, AchievementProgress]]:
    """Highest-tier achievements first; ties broken by identifier for stability."""

    earned = [
        (definition_for(identifier, catalog), record)
        for identifier, record in progress.items()
        if record.highest_tier_achieved is not None
    ]
    earned.sort(key=lambda pair: (-pair[1].highest_tier_achieved, pair[0].identifier.value))
    return earned[:count]
