"""Derive cumulative achievement counters from a profile's match history.

The tracker only accepts counters, so everything history-based is computed
here: a full pass over the matches produces one value per identifier. Count
style achievements (games played, victories, pickles) are always reported;
one-off feats are reported only once earned so untouched achievements stay
absent from the progress map.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from datetime import date, datetime, timedelta

from src.contracts.achievements import AchievementId
from src.contracts.common import Side, Sport
from src.contracts.match import MatchRecord
from src.core.rules import rules_for

logger = logging.getLogger(__name__)

COMEBACK_DEFICIT = 5
EARLY_BIRD_HOUR = 7
NIGHT_OWL_HOUR = 22
WEEKEND_DAYS = frozenset({5, 6})  # Saturday, Sunday
HOLIDAYS = frozenset({(1, 1), (7, 4), (12, 25), (12, 31)})
PERFECT_START_POINTS = 3
CLEAN_SWEEP_WINS = 3
MARATHON_SECONDS = 45 * 60
SPEED_DEMON_SECONDS = 10 * 60
DEUCE_MASTER_STREAK = 5
TOURNAMENT_WEEK_MATCHES = 10
ONE_YEAR_DAYS = 365
DIAMOND_HANDS_STREAK = 100


def daily_streak(matches: Sequence[MatchRecord], today: date) -> int:
    """Consecutive days played, ending today. A streak not extended today is 0."""

    days = sorted({match.played_at.date() for match in matches}, reverse=True)
    if not days or days[0] < today:
        return 0

    streak = 1
    for newer, older in zip(days, days[1:]):
        if newer - older != timedelta(days=1):
            break
        streak += 1
    return streak


def max_deficit(match: MatchRecord) -> int:
    """Largest margin the tracked side trailed by (0 if it never trailed)."""

    return max((-event.lead for event in match.events), default=0)


def _is_comeback(match: MatchRecord) -> bool:
    return match.is_win and max_deficit(match) >= COMEBACK_DEFICIT


def _is_perfect_start(match: MatchRecord) -> bool:
    if not match.is_win or not match.events:
        return False
    opening = sorted(match.events, key=lambda event: event.timestamp)[:PERFECT_START_POINTS]
    return all(event.player2_score == 0 for event in opening)


def _won_deuce_streak(match: MatchRecord) -> bool:
    """Tracked side won ``DEUCE_MASTER_STREAK`` deuce points without losing one."""

    rules = rules_for(match.sport)
    if rules.is_rally_scoring:
        return False

    streak = 0
    for event in match.events:
        if not rules.is_game_point(event.player1_score, event.player2_score):
            continue
        if event.scoring_player == Side.PLAYER1:
            streak += 1
            if streak >= DEUCE_MASTER_STREAK:
                return True
        else:
            streak = 0
    return False


def _is_bagel(match: MatchRecord) -> bool:
    return match.is_win and match.player1_score == 6 and match.player2_score == 0


def evaluate_counters(
    matches: Sequence[MatchRecord],
    *,
    today: date,
    first_launch: date | datetime | None = None,
) -> dict[AchievementId, int]:
    """Compute the counter value for every achievement the history can speak to.

    Rating climber and tiebreak titan have no signal in a match record and are
    never reported here.
    """

    wins = [match for match in matches if match.is_win]
    streak = daily_streak(matches, today)

    counters: dict[AchievementId, int] = {
        AchievementId.GAMES_PLAYED: len(matches),
        AchievementId.VICTORIES: len(wins),
        AchievementId.DAILY_STREAK: streak,
        AchievementId.COMEBACKS: sum(1 for match in matches if _is_comeback(match)),
        AchievementId.WEEKEND_WARRIOR: sum(
            1 for match in matches if match.played_at.weekday() in WEEKEND_DAYS
        ),
        AchievementId.CENTURY_CLUB: sum(match.player1_score for match in matches),
    }

    flags: dict[AchievementId, bool] = {
        AchievementId.EARLY_BIRD: any(m.played_at.hour < EARLY_BIRD_HOUR for m in wins),
        AchievementId.NIGHT_OWL: any(m.played_at.hour >= NIGHT_OWL_HOUR for m in wins),
        AchievementId.HOLIDAY_HUSTLE: any(
            (m.played_at.month, m.played_at.day) in HOLIDAYS for m in matches
        ),
        AchievementId.PERFECT_START: any(_is_perfect_start(m) for m in matches),
        AchievementId.CLEAN_SWEEP: any(
            count >= CLEAN_SWEEP_WINS
            for count in Counter(m.played_at.date() for m in wins).values()
        ),
        AchievementId.MARATHON_MATCH: any(m.elapsed_seconds >= MARATHON_SECONDS for m in matches),
        AchievementId.SPEED_DEMON: any(m.elapsed_seconds < SPEED_DEMON_SECONDS for m in wins),
        AchievementId.DEUCE_MASTER: any(_won_deuce_streak(m) for m in wins),
        AchievementId.TOURNAMENT_READY: any(
            count >= TOURNAMENT_WEEK_MATCHES
            for count in Counter(
                m.played_at.isocalendar()[:2] for m in matches
            ).values()
        ),
    }

    this_year = sorted(
        (m for m in matches if m.played_at.year == today.year), key=lambda m: m.played_at
    )
    flags[AchievementId.NEW_YEAR_CHAMPION] = bool(this_year) and this_year[0].is_win

    if first_launch is not None:
        launch_day = first_launch.date() if isinstance(first_launch, datetime) else first_launch
        is_anniversary = (launch_day.month, launch_day.day) == (today.month, today.day)
        flags[AchievementId.ANNIVERSARY_WIN] = is_anniversary and any(
            m.played_at.date() == today for m in wins
        )
        flags[AchievementId.ONE_YEAR_STRONG] = (today - launch_day).days >= ONE_YEAR_DAYS

    counters.update({identifier: 1 for identifier, earned in flags.items() if earned})

    if {match.sport for match in matches} >= set(Sport):
        counters[AchievementId.CROSS_SPORT] = len(Sport)
    if streak >= DIAMOND_HANDS_STREAK:
        counters[AchievementId.DIAMOND_HANDS] = DIAMOND_HANDS_STREAK

    by_sport = {sport: [m for m in matches if m.sport == sport] for sport in Sport}
    counters[AchievementId.PB_VICTORIES] = sum(1 for m in by_sport[Sport.PICKLEBALL] if m.is_win)
    counters[AchievementId.PICKLER] = sum(
        1
        for m in by_sport[Sport.PICKLEBALL]
        if m.is_win and m.player1_score == 11 and m.player2_score == 0
    )
    counters[AchievementId.PICKLED] = sum(
        1
        for m in by_sport[Sport.PICKLEBALL]
        if not m.is_win and m.player1_score == 0 and m.player2_score == 11
    )
    counters[AchievementId.TENNIS_VICTORIES] = sum(1 for m in by_sport[Sport.TENNIS] if m.is_win)
    counters[AchievementId.BAGEL_BARON] = sum(1 for m in by_sport[Sport.TENNIS] if _is_bagel(m))
    counters[AchievementId.PADEL_VICTORIES] = sum(1 for m in by_sport[Sport.PADEL] if m.is_win)
    counters[AchievementId.ROSCO_ROYALTY] = sum(1 for m in by_sport[Sport.PADEL] if _is_bagel(m))

    logger.debug("Evaluated %d counters over %d matches", len(counters), len(matches))
    return counters
