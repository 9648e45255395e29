"""Momentum scan: scoring runs, lead changes and biggest leads."""

from collections.abc import Sequence

from src.contracts.common import Side
from src.contracts.events import PointEvent
from src.contracts.insights import MomentumInsights


def count_lead_changes(events: Sequence[PointEvent]) -> int:
    """Number of times the lead passed from one side to the other.

    Tied scores do not clear the last leader, and taking the first lead of the
    match is not a change.
    """
    changes = 0
    last_leader: Side | None = None
    for event in events:
        leader = event.leader
        if leader is None:
            continue
        if last_leader is not None and leader != last_leader:
            changes += 1
        last_leader = leader
    return changes


def calculate_momentum_insights(events: Sequence[PointEvent]) -> MomentumInsights:
    """Runs per side reset the moment the other side scores; the best is kept."""
    best_run = {Side.PLAYER1: 0, Side.PLAYER2: 0}
    current_run = 0
    run_side: Side | None = None

    your_biggest_lead = 0
    opponent_biggest_lead = 0

    for event in events:
        scorer = event.scoring_player
        if scorer == run_side:
            current_run += 1
        else:
            run_side = scorer
            current_run = 1
        best_run[scorer] = max(best_run[scorer], current_run)

        lead = event.lead
        if lead > 0:
            your_biggest_lead = max(your_biggest_lead, lead)
        elif lead < 0:
            opponent_biggest_lead = max(opponent_biggest_lead, -lead)

    return MomentumInsights(
        your_max_streak=best_run[Side.PLAYER1],
        opponent_max_streak=best_run[Side.PLAYER2],
        lead_changes=count_lead_changes(events),
        your_biggest_lead=your_biggest_lead,
        opponent_biggest_lead=opponent_biggest_lead,
    )
