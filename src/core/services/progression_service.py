"""Apply finished matches to a profile's persisted progression.

The calculators are pure; this service is the read-modify-write shell around
them. Every mutating call for one profile runs under that profile's lock, so
concurrent matches for the same player are applied one at a time and the
monotonicity of values, tiers and experience holds.
"""

from __future__ import annotations

import logging
import threading
import weakref
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

from src.contracts.achievements import (
    AchievementId,
    AchievementProgress,
    ProgressBatchResult,
)
from src.contracts.experience import ExperienceAwardResult, ExperienceState
from src.contracts.match import MatchRecord
from src.contracts.progression import (
    MatchProgressReport,
    ProgressChangedEvent,
    ProgressChangeKind,
)
from src.core.achievements.evaluator import evaluate_counters
from src.core.achievements.tracker import apply_progress_batch, reset_progress
from src.core.insights.calculator import compute_insights
from src.core.leveling.engine import award_experience
from src.core.observability import trace_critical
from src.core.ports import ProfileStorePort, ProgressNotifierPort

logger = logging.getLogger(__name__)


class ProgressionService:
    """Orchestrate insights, achievements and experience for host profiles."""

    def __init__(
        self,
        *,
        store: ProfileStorePort,
        notifier: ProgressNotifierPort | None = None,
        key_prefix: str = "profile",
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._key_prefix = key_prefix
        # Entries vanish once no caller holds the profile lock
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def record_match(
        self,
        profile_id: str,
        match: MatchRecord,
        *,
        history: Sequence[MatchRecord] = (),
        today: date,
        first_launch: date | datetime | None = None,
    ) -> MatchProgressReport:
        """Run a finished match through every calculator and persist the result.

        ``history`` holds the profile's earlier matches; ``match`` is appended
        unless a match with the same id is already in it.
        """
        insights = compute_insights(match)

        matches = list(history)
        if all(previous.match_id != match.match_id for previous in matches):
            matches.append(match)
        counters = evaluate_counters(matches, today=today, first_launch=first_launch)

        with self._lock_for(profile_id):
            award = self._award_locked(profile_id, match)
            batch = self._apply_counters_locked(profile_id, counters)
            running_total = self._load_points(profile_id)

        self._announce_award(profile_id, award)
        self._announce_batch(profile_id, batch)

        return MatchProgressReport(
            profile_id=profile_id,
            match_id=match.match_id,
            insights=insights,
            experience_award=award.award,
            experience=award.state,
            crossings=batch.crossings,
            achievement_points_gained=batch.points_gained,
            total_achievement_points=running_total,
        )

    def award_experience(self, profile_id: str, match: MatchRecord) -> ExperienceAwardResult:
        """Award experience for ``match`` and persist the new state."""
        with self._lock_for(profile_id):
            result = self._award_locked(profile_id, match)
        self._announce_award(profile_id, result)
        return result

    def apply_counters(
        self, profile_id: str, counters: Mapping[AchievementId, int]
    ) -> ProgressBatchResult:
        """Fold cumulative counters into the stored progress map."""
        with self._lock_for(profile_id):
            batch = self._apply_counters_locked(profile_id, counters)
        self._announce_batch(profile_id, batch)
        return batch

    def load_experience(self, profile_id: str) -> ExperienceState:
        raw = self._store.get(self._key(profile_id, "experience"))
        if raw is None:
            return ExperienceState()
        # The level is derived data: rebuild it from the total
        state = ExperienceState.from_total(int(raw.get("total_experience", 0)))
        if raw.get("level") != state.level:
            logger.warning(
                "Stored level %s for profile %s does not match total %s; using level %s",
                raw.get("level"),
                profile_id,
                state.total_experience,
                state.level,
            )
        return state

    def load_progress(self, profile_id: str) -> dict[AchievementId, AchievementProgress]:
        raw = self._store.get(self._key(profile_id, "achievements")) or {}
        return {
            AchievementId(identifier): AchievementProgress.model_validate(record)
            for identifier, record in raw.items()
        }

    def total_points(self, profile_id: str) -> int:
        """Running achievement point total for ``profile_id``."""
        return self._load_points(profile_id)

    @trace_critical
    def reset_profile(self, profile_id: str) -> None:
        """Explicit user wipe: the only path that lowers stored values."""
        with self._lock_for(profile_id):
            for suffix in ("experience", "achievement_points"):
                self._store.delete(self._key(profile_id, suffix))
            self._save_progress(profile_id, reset_progress())
        logger.warning("Progression reset for profile %s", profile_id)
        self._notify(ProgressChangedEvent(profile_id=profile_id, kind=ProgressChangeKind.RESET))

    # ------------------------------------------------------------------
    # Locked steps (caller holds the profile lock)
    # ------------------------------------------------------------------

    def _award_locked(self, profile_id: str, match: MatchRecord) -> ExperienceAwardResult:
        state = self.load_experience(profile_id)
        result = award_experience(match, state)
        if result.state != state:
            self._store.set(self._key(profile_id, "experience"), result.state.model_dump(mode="json"))
        return result

    def _apply_counters_locked(
        self, profile_id: str, counters: Mapping[AchievementId, int]
    ) -> ProgressBatchResult:
        progress = self.load_progress(profile_id)
        batch = apply_progress_batch(counters, progress)
        if batch.progress != progress:
            self._save_progress(profile_id, batch.progress)
        if batch.points_gained:
            total = self._load_points(profile_id) + batch.points_gained
            self._store.set(self._key(profile_id, "achievement_points"), total)
        return batch

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _lock_for(self, profile_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(profile_id)
            if lock is None:
                lock = self._locks[profile_id] = threading.Lock()
            return lock

    def _key(self, profile_id: str, suffix: str) -> str:
        return f"{self._key_prefix}:{profile_id}:{suffix}"

    def _load_points(self, profile_id: str) -> int:
        value: Any = self._store.get(self._key(profile_id, "achievement_points"))
        return int(value or 0)

    def _save_progress(
        self, profile_id: str, progress: Mapping[AchievementId, AchievementProgress]
    ) -> None:
        payload = {
            identifier.value: record.model_dump(mode="json")
            for identifier, record in progress.items()
        }
        self._store.set(self._key(profile_id, "achievements"), payload)

    def _announce_award(self, profile_id: str, result: ExperienceAwardResult) -> None:
        if result.award.total_awarded <= 0:
            return
        self._notify(
            ProgressChangedEvent(
                profile_id=profile_id,
                kind=ProgressChangeKind.EXPERIENCE,
                leveled_up=result.award.leveled_up,
            )
        )

    def _announce_batch(self, profile_id: str, batch: ProgressBatchResult) -> None:
        if not batch.changed:
            return
        self._notify(
            ProgressChangedEvent(
                profile_id=profile_id,
                kind=ProgressChangeKind.ACHIEVEMENTS,
                crossings=batch.crossings,
            )
        )

    def _notify(self, event: ProgressChangedEvent) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.notify(event)
        except Exception:
            logger.exception("Progress notifier failed for profile %s", event.profile_id)
