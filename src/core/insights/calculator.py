"""Core insight calculation logic - pure domain functions with zero I/O.

Each dimension (serve, momentum, clutch) is a single left-to-right pass over
the match's point log. The functions never mutate their input and are safe to
call concurrently over the same match.

CRITICAL: This module MUST NOT contain any:
- Persistence of progress or experience
- File or network I/O
- Sport rules derived from score values (use ``src.core.rules``)
"""

import logging
from collections.abc import Sequence

from src.contracts.common import DoublesServerRole, Side
from src.contracts.events import PointEvent
from src.contracts.insights import ClutchInsights, InsightsResult, ServeInsights
from src.contracts.match import MatchRecord
from src.core import metrics
from src.core.insights.highlights import extract_key_moments
from src.core.insights.momentum import calculate_momentum_insights
from src.core.insights.story import tell_match_story
from src.core.observability import trace_performance
from src.core.rules import SportRules, rules_for

logger = logging.getLogger(__name__)

# A single point carries no sequence to analyze
MIN_EVENTS_FOR_INSIGHTS = 2


def calculate_serve_insights(
    events: Sequence[PointEvent], rules: SportRules, *, is_doubles: bool
) -> ServeInsights:
    """Partition points by server and count how many the tracked side won.

    Points with no recorded server are skipped. In doubles a tracked-side
    serve is credited to ``you`` or ``partner`` by role; points without a role
    are counted for neither.
    """
    you_served = you_won = 0
    partner_served = partner_won = 0
    opponent_served = side_outs = breaks = 0

    for event in events:
        if event.serving_player is None:
            continue

        tracked_scored = event.scoring_player == Side.PLAYER1

        if event.serving_player == Side.PLAYER1:
            if not is_doubles or event.doubles_server_role == DoublesServerRole.SELF:
                you_served += 1
                you_won += tracked_scored
            elif event.doubles_server_role == DoublesServerRole.PARTNER:
                partner_served += 1
                partner_won += tracked_scored
            continue

        opponent_served += 1
        if tracked_scored:
            if rules.is_rally_scoring:
                side_outs += 1
            else:
                breaks += 1

    return ServeInsights(
        you_served_points=you_served,
        you_served_points_won=you_won,
        partner_served_points=partner_served,
        partner_served_points_won=partner_won,
        opponent_served_points=opponent_served,
        side_outs_defended=side_outs,
        break_points_won=breaks,
        opponent_points_label=rules.opponent_serve_label,
    )


def calculate_clutch_insights(events: Sequence[PointEvent], rules: SportRules) -> ClutchInsights:
    """Count pressure points on the score after each event."""
    game_points_played = game_points_won = 0
    break_points_played = break_points_converted = 0

    for event in events:
        tracked_scored = event.scoring_player == Side.PLAYER1
        p1, p2 = event.player1_score, event.player2_score

        if rules.is_game_point(p1, p2):
            game_points_played += 1
            game_points_won += tracked_scored

        if rules.is_break_point(p1, p2, opponent_serving=event.serving_player == Side.PLAYER2):
            break_points_played += 1
            break_points_converted += tracked_scored

    return ClutchInsights(
        game_points_played=game_points_played,
        game_points_won=game_points_won,
        break_points_played=break_points_played,
        break_points_converted=break_points_converted,
    )


@trace_performance
def compute_insights(match: MatchRecord) -> InsightsResult | None:
    """Derive serve, momentum and clutch insights for a finished match.

    Returns ``None`` when the match carries fewer than two point events: the
    host must show an "unavailable" state rather than a row of zeros.
    """
    if len(match.events) < MIN_EVENTS_FOR_INSIGHTS:
        logger.debug(
            "Insights unavailable for match %s: %d event(s)", match.match_id, len(match.events)
        )
        metrics.mark_insights(match.sport.value, available=False)
        return None

    rules = rules_for(match.sport)
    events = match.events

    result = InsightsResult(
        match_id=match.match_id,
        sport=match.sport,
        is_doubles=match.is_doubles,
        serve=calculate_serve_insights(events, rules, is_doubles=match.is_doubles),
        momentum=calculate_momentum_insights(events),
        clutch=calculate_clutch_insights(events, rules),
        key_moments=tuple(extract_key_moments(match)),
        story=tell_match_story(match),
    )
    metrics.mark_insights(match.sport.value, available=True)
    return result
