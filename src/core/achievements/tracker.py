"""Achievement progress tracker.

Callers feed cumulative counters, never deltas. A record's value only moves
up and its tier only moves forward; ``reset_progress`` is the single way back
to an empty map. The functions return new maps and leave their input alone so
the caller can commit or discard the result atomically.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime

from src.contracts.achievements import (
    AchievementDefinition,
    AchievementId,
    AchievementProgress,
    AchievementTier,
    ProgressBatchResult,
    ProgressUpdate,
    TierCrossing,
)
from src.core import metrics
from src.core.achievements.catalog import ACHIEVEMENT_CATALOG, definition_for, points_for

logger = logging.getLogger(__name__)

ProgressMap = Mapping[AchievementId, AchievementProgress]


def highest_tier_reached(definition: AchievementDefinition, value: int) -> AchievementTier | None:
    """The most severe defined tier whose threshold ``value`` meets."""

    reached: AchievementTier | None = None
    for tier, requirement in definition.ordered_tiers:
        if value >= requirement.threshold:
            reached = tier
    return reached


def apply_progress(
    identifier: AchievementId,
    new_value: int,
    progress: ProgressMap,
    catalog: Mapping[AchievementId, AchievementDefinition] = ACHIEVEMENT_CATALOG,
    *,
    now: datetime | None = None,
) -> ProgressUpdate:
    """Fold one observed counter into the record for ``identifier``.

    Applying the same value twice is a no-op the second time. A value lower
    than the stored one leaves the record untouched.
    """

    definition = definition_for(identifier, catalog)
    identifier = definition.identifier
    timestamp = now or datetime.now(UTC)

    existing = progress.get(identifier)
    if existing is None:
        existing = AchievementProgress(identifier=identifier, date_last_updated=timestamp)
        created = True
    else:
        created = False

    value = max(existing.current_value, new_value)
    value_changed = value != existing.current_value

    previous_tier = existing.highest_tier_achieved
    candidate = highest_tier_reached(definition, value)
    crossing: TierCrossing | None = None
    tier = previous_tier
    if candidate is not None and (previous_tier is None or candidate > previous_tier):
        tier = candidate
        crossing = TierCrossing(
            identifier=identifier,
            tier=candidate,
            previous_tier=previous_tier,
            points=points_for(identifier, candidate, catalog)
            - points_for(identifier, previous_tier, catalog),
        )
        logger.info(
            "Achievement %s reached %s (+%d points)",
            identifier.value,
            candidate.label,
            crossing.points,
        )
        metrics.mark_tier_crossing(identifier.value, candidate.label)

    if not (created or value_changed or crossing):
        return ProgressUpdate(record=existing, crossing=None, changed=False)

    record = existing.model_copy(
        update={
            "current_value": value,
            "highest_tier_achieved": tier,
            "date_last_updated": timestamp if value_changed else existing.date_last_updated,
        }
    )
    return ProgressUpdate(record=record, crossing=crossing, changed=value_changed or crossing is not None)


def apply_progress_batch(
    values: Mapping[AchievementId, int],
    progress: ProgressMap,
    catalog: Mapping[AchievementId, AchievementDefinition] = ACHIEVEMENT_CATALOG,
    *,
    now: datetime | None = None,
) -> ProgressBatchResult:
    """Apply several counters against one snapshot of the progress map."""

    timestamp = now or datetime.now(UTC)
    updated = dict(progress)
    changed_ids: list[AchievementId] = []
    crossings: list[TierCrossing] = []

    for identifier, value in values.items():
        update = apply_progress(identifier, value, updated, catalog, now=timestamp)
        updated[update.record.identifier] = update.record
        if update.changed:
            changed_ids.append(update.record.identifier)
        if update.crossing is not None:
            crossings.append(update.crossing)

    return ProgressBatchResult(
        progress=updated,
        updated_identifiers=tuple(changed_ids),
        crossings=tuple(crossings),
        points_gained=sum(crossing.points for crossing in crossings),
    )


def reset_progress() -> dict[AchievementId, AchievementProgress]:
    """Return an empty progress map. Only an explicit user wipe should call this."""

    logger.warning("Achievement progress reset requested")
    return {}
