"""Experience award engine.

``compute_award`` is pure: it turns a finished match into labelled award
lines. ``award_experience`` folds that award into an ``ExperienceState`` and
returns the new state; persisting it is the caller's job.

All amounts and thresholds are fixed constants.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.contracts.events import PointEvent
from src.contracts.experience import (
    ExperienceAward,
    ExperienceAwardLine,
    ExperienceAwardResult,
    ExperienceState,
)
from src.contracts.match import MatchRecord
from src.core import metrics
from src.core.leveling.curve import cumulative_experience_for
from src.core.observability import trace_performance
from src.core.rules import rules_for

logger = logging.getLogger(__name__)

GAME_COMPLETED_XP = 50
VICTORY_BONUS_XP = 25
COMEBACK_BONUS_XP = 20
COMEBACK_DEFICIT = 4
RALLY_RUN_LENGTH = 3
RALLY_BONUS_XP = 5
RALLY_BONUS_CAP = 40
DOMINANT_WIN_XP = 20
DOMINANT_WIN_MARGIN = 5
ENDURANCE_XP = 10
ENDURANCE_SECONDS = 900

LABEL_GAME_COMPLETED = "Game Completed"
LABEL_VICTORY = "Victory Bonus"
LABEL_COMEBACK = "Comeback"
LABEL_LONG_RALLIES = "Long Rallies"
LABEL_DOMINANT_WIN = "Dominant Win"
LABEL_ENDURANCE = "Endurance"


def rally_bonus(events: Sequence[PointEvent]) -> int:
    """Bonus for runs of consecutive serve points at even score parity.

    Each run earns the increment once, when it reaches ``RALLY_RUN_LENGTH``
    points; the total is capped no matter how many runs qualify.
    """
    bonus = 0
    run = 0
    for event in events:
        if event.is_serve_point and (event.player1_score + event.player2_score) % 2 == 0:
            run += 1
            if run == RALLY_RUN_LENGTH:
                bonus += RALLY_BONUS_XP
        else:
            run = 0
    return min(bonus, RALLY_BONUS_CAP)


def compute_award(match: MatchRecord) -> ExperienceAward:
    """Labelled experience for ``match``; every component is gated independently."""
    lines = [ExperienceAwardLine(label=LABEL_GAME_COMPLETED, amount=GAME_COMPLETED_XP)]

    if match.is_win:
        lines.append(ExperienceAwardLine(label=LABEL_VICTORY, amount=VICTORY_BONUS_XP))

    if match.events:
        if match.is_win and any(-event.lead >= COMEBACK_DEFICIT for event in match.events):
            lines.append(ExperienceAwardLine(label=LABEL_COMEBACK, amount=COMEBACK_BONUS_XP))

        rallies = rally_bonus(match.events)
        if rallies > 0:
            lines.append(ExperienceAwardLine(label=LABEL_LONG_RALLIES, amount=rallies))

    target = rules_for(match.sport).regulation_target
    if (
        match.is_win
        and match.player1_score >= target
        and match.player1_score - match.player2_score >= DOMINANT_WIN_MARGIN
    ):
        lines.append(ExperienceAwardLine(label=LABEL_DOMINANT_WIN, amount=DOMINANT_WIN_XP))

    if match.elapsed_seconds > ENDURANCE_SECONDS:
        lines.append(ExperienceAwardLine(label=LABEL_ENDURANCE, amount=ENDURANCE_XP))

    return ExperienceAward(
        match_id=match.match_id,
        total_awarded=sum(line.amount for line in lines),
        breakdown=tuple(lines),
    )


def apply_experience(state: ExperienceState, amount: int) -> ExperienceState:
    """Add ``amount`` and advance the level across as many boundaries as it covers."""
    if amount <= 0:
        return state

    total = state.total_experience + amount
    level = state.level
    while total >= cumulative_experience_for(level + 1):
        level += 1
    return ExperienceState(total_experience=total, level=level)


@trace_performance
def award_experience(match: MatchRecord, state: ExperienceState) -> ExperienceAwardResult:
    """Compute the award for ``match`` and apply it to ``state``."""
    award = compute_award(match)
    new_state = apply_experience(state, award.total_awarded)
    leveled_up = new_state.level > state.level

    if leveled_up:
        logger.info(
            "Level up after match %s: %d -> %d", match.match_id, state.level, new_state.level
        )
        metrics.mark_level_up(new_state.level - state.level)
    metrics.mark_experience_awarded(award.total_awarded)

    return ExperienceAwardResult(
        award=award.model_copy(update={"leveled_up": leveled_up}),
        state=new_state,
        previous_level=state.level,
    )
