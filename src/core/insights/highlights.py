"""Key moment extraction.

Highlights are emitted in a fixed order: best tracked-side run, biggest
overturned deficit, last late clutch point, first service winner and, on a
loss only, the opponent's best run. Each detector returns ``None`` when its
moment did not happen.
"""

from collections.abc import Sequence

from src.contracts.common import ShotType, Side
from src.contracts.events import PointEvent
from src.contracts.insights import HighlightKind, KeyMoment
from src.contracts.match import MatchRecord
from src.core.rules import rules_for

MIN_HIGHLIGHT_RUN = 3
MIN_COMEBACK_DEFICIT = 3


def longest_run(events: Sequence[PointEvent], side: Side) -> tuple[int, PointEvent | None]:
    """Length of ``side``'s longest consecutive run and the event that ended it.

    On equal lengths the earliest run wins.
    """
    best_length = 0
    best_end: PointEvent | None = None
    current = 0
    for event in events:
        if event.scoring_player == side:
            current += 1
            if current > best_length:
                best_length = current
                best_end = event
        else:
            current = 0
    return best_length, best_end


def _scoring_run(events: Sequence[PointEvent]) -> KeyMoment | None:
    length, end = longest_run(events, Side.PLAYER1)
    if length < MIN_HIGHLIGHT_RUN or end is None:
        return None
    return KeyMoment(
        kind=HighlightKind.SCORING_RUN,
        title=f"{length}-Point Run",
        description=f"Scored {length} consecutive points",
        score=end.score_label,
    )


def _comeback(events: Sequence[PointEvent]) -> KeyMoment | None:
    # Deepest deficit seen so far, and the deepest one that was later overturned
    running_deficit = 0
    overturned_deficit = 0
    retake: PointEvent | None = None

    for event in events:
        running_deficit = max(running_deficit, -event.lead)
        if (
            event.lead > 0
            and running_deficit >= MIN_COMEBACK_DEFICIT
            and running_deficit > overturned_deficit
        ):
            overturned_deficit = running_deficit
            retake = event

    if retake is None:
        return None
    return KeyMoment(
        kind=HighlightKind.COMEBACK,
        title="Comeback",
        description=f"Overcame a {overturned_deficit}-point deficit",
        score=retake.score_label,
    )


def _clutch_point(events: Sequence[PointEvent], late_floor: int) -> KeyMoment | None:
    for event in reversed(events):
        if (
            event.scoring_player == Side.PLAYER1
            and event.player1_score >= late_floor
            and event.player2_score >= late_floor
        ):
            return KeyMoment(
                kind=HighlightKind.CLUTCH_POINT,
                title="Clutch Point",
                description=(
                    f"Scored under pressure at {event.player1_score - 1}-{event.player2_score}"
                ),
                score=event.score_label,
            )
    return None


def _service_winner(events: Sequence[PointEvent]) -> KeyMoment | None:
    for event in events:
        if (
            event.serving_player == Side.PLAYER1
            and event.scoring_player == Side.PLAYER1
            and event.shot_type == ShotType.SERVE
        ):
            return KeyMoment(
                kind=HighlightKind.SERVICE_WINNER,
                title="Service Winner",
                description="Won point directly on serve",
                score=event.score_label,
            )
    return None


def _opponent_run(events: Sequence[PointEvent]) -> KeyMoment | None:
    length, end = longest_run(events, Side.PLAYER2)
    if length < MIN_HIGHLIGHT_RUN or end is None:
        return None
    return KeyMoment(
        kind=HighlightKind.OPPONENT_RUN,
        title="Opponent's Run",
        description=f"They scored {length} in a row",
        score=end.score_label,
        is_positive=False,
    )


def extract_key_moments(match: MatchRecord) -> list[KeyMoment]:
    """Return the match highlights in display order (possibly empty)."""
    events = match.events
    if not events:
        return []

    rules = rules_for(match.sport)
    candidates = [
        _scoring_run(events),
        _comeback(events),
        _clutch_point(events, rules.late_clutch_floor),
        _service_winner(events),
    ]
    if not match.is_win:
        candidates.append(_opponent_run(events))

    return [moment for moment in candidates if moment is not None]
