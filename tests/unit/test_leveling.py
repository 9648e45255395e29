"""Leveling curve and experience award tests."""

import pytest

from src.contracts.common import Side, Sport
from src.contracts.events import PointEvent
from src.contracts.experience import ExperienceState
from src.core import metrics
from src.core.leveling import cumulative_experience_for, level_cost, level_for_experience
from src.core.leveling.engine import (
    apply_experience,
    award_experience,
    compute_award,
    rally_bonus,
)


# ============================================================================
# Curve
# ============================================================================


def test_level_costs_grow_geometrically() -> None:
    assert [level_cost(level) for level in range(1, 6)] == [100, 150, 225, 337, 505]


def test_cumulative_thresholds() -> None:
    assert cumulative_experience_for(1) == 0
    assert cumulative_experience_for(2) == 100
    assert cumulative_experience_for(3) == 250
    assert cumulative_experience_for(4) == 475
    assert cumulative_experience_for(5) == 812


def test_curve_is_strictly_increasing() -> None:
    thresholds = [cumulative_experience_for(level) for level in range(1, 40)]

    assert all(lower < higher for lower, higher in zip(thresholds, thresholds[1:]))


@pytest.mark.parametrize(
    ("total", "level"),
    [(0, 1), (99, 1), (100, 2), (249, 2), (250, 3), (474, 3), (475, 4), (812, 5)],
)
def test_level_for_experience_is_the_unique_bracket(total: int, level: int) -> None:
    assert level_for_experience(total) == level
    assert cumulative_experience_for(level) <= total < cumulative_experience_for(level + 1)


def test_level_cost_rejects_level_zero() -> None:
    with pytest.raises(ValueError):
        level_cost(0)


# ============================================================================
# Award computation
# ============================================================================


def test_plain_win_without_detail(build_match) -> None:
    award = compute_award(build_match("", player1_score=11, player2_score=9))

    assert award.total_awarded == 75
    assert [(line.label, line.amount) for line in award.breakdown] == [
        ("Game Completed", 50),
        ("Victory Bonus", 25),
    ]


def test_loss_earns_completion_only(build_match) -> None:
    award = compute_award(build_match("", player1_score=7, player2_score=11))

    assert award.total_awarded == 50
    assert award.amount_for("Victory Bonus") == 0


def test_comeback_and_dominant_win(build_match) -> None:
    # Down 0-4, then eleven straight points: 11-4
    award = compute_award(build_match("2222" + "1" * 11))

    assert award.amount_for("Comeback") == 20
    assert award.amount_for("Dominant Win") == 20
    assert award.total_awarded == 50 + 25 + 20 + 20


def test_three_point_deficit_is_not_a_comeback(build_match) -> None:
    award = compute_award(build_match("222" + "1" * 11))

    assert award.amount_for("Comeback") == 0


def test_dominant_win_uses_sport_target(build_match) -> None:
    tennis = compute_award(build_match("", sport=Sport.TENNIS, player1_score=6, player2_score=1))
    short = compute_award(build_match("", sport=Sport.PICKLEBALL, player1_score=9, player2_score=2))
    close = compute_award(build_match("", player1_score=11, player2_score=7))

    assert tennis.amount_for("Dominant Win") == 20
    assert short.amount_for("Dominant Win") == 0
    assert close.amount_for("Dominant Win") == 0


@pytest.mark.parametrize(("elapsed", "bonus"), [(900, 0), (901, 10)])
def test_endurance_bonus(build_match, elapsed: float, bonus: int) -> None:
    award = compute_award(build_match("", player1_score=3, player2_score=11, elapsed_seconds=elapsed))

    assert award.amount_for("Endurance") == bonus


def _serve_event(p1: int, p2: int, *, serve: bool = True) -> PointEvent:
    return PointEvent(
        scoring_player=Side.PLAYER1,
        serving_player=Side.PLAYER1,
        player1_score=p1,
        player2_score=p2,
        is_serve_point=serve,
    )


def _qualifying_runs(count: int) -> list[PointEvent]:
    events: list[PointEvent] = []
    score = 0
    for _ in range(count):
        for _ in range(3):
            score += 1
            events.append(_serve_event(score, score))
        # Odd combined score ends the run
        events.append(_serve_event(score + 1, score))
    return events


def test_rally_bonus_per_run() -> None:
    events = _qualifying_runs(2)

    assert rally_bonus(events) == 10


def test_rally_bonus_needs_serve_points_at_even_parity() -> None:
    events = [_serve_event(1, 1), _serve_event(2, 2, serve=False), _serve_event(3, 3)]

    assert rally_bonus(events) == 0
    assert rally_bonus(_qualifying_runs(1)[:2]) == 0


def test_rally_bonus_is_capped() -> None:
    assert rally_bonus(_qualifying_runs(9)) == 40


def test_rally_bonus_appears_in_breakdown(build_match) -> None:
    match = build_match(events=_qualifying_runs(3), player1_score=11, player2_score=9)

    award = compute_award(match)

    assert award.amount_for("Long Rallies") == 15


# ============================================================================
# Applying experience
# ============================================================================


def test_zero_award_leaves_state_unchanged() -> None:
    state = ExperienceState.from_total(120)

    assert apply_experience(state, 0) is state


def test_single_award_can_cross_several_levels() -> None:
    state = apply_experience(ExperienceState(), 480)

    assert state.total_experience == 480
    assert state.level == 4
    assert state.is_consistent


def test_award_experience_reports_level_up(build_match) -> None:
    state = ExperienceState.from_total(60)

    result = award_experience(build_match("", player1_score=11, player2_score=9), state)

    assert result.state.total_experience == 135
    assert result.state.level == 2
    assert result.previous_level == 1
    assert result.levels_gained == 1
    assert result.award.leveled_up is True


def test_award_without_level_up(build_match) -> None:
    result = award_experience(
        build_match("", player1_score=3, player2_score=11), ExperienceState.from_total(0)
    )

    assert result.state.total_experience == 50
    assert result.award.leveled_up is False
    assert result.levels_gained == 0


def test_awards_are_counted_in_metrics(build_match) -> None:
    before = metrics._registry.get_sample_value("point_experience_awarded_total") or 0.0

    award_experience(build_match("", player1_score=11, player2_score=9), ExperienceState())

    assert metrics._registry.get_sample_value("point_experience_awarded_total") == before + 75


def test_metrics_disabled_records_nothing(build_match, settings_override) -> None:
    settings_override(metrics_enabled=False)
    before = metrics._registry.get_sample_value("point_experience_awarded_total") or 0.0

    award_experience(build_match("", player1_score=11, player2_score=9), ExperienceState())

    assert (metrics._registry.get_sample_value("point_experience_awarded_total") or 0.0) == before
