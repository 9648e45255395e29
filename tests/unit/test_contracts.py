"""Contract model validation tests."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from src.contracts import (
    AchievementDefinition,
    AchievementCategory,
    AchievementId,
    AchievementTier,
    ClutchInsights,
    ExperienceState,
    MatchRecord,
    PointEvent,
    ServeInsights,
    Side,
    Sport,
)


class TestPointEvent:
    def test_derived_lead_and_label(self) -> None:
        event = PointEvent(scoring_player=Side.PLAYER2, player1_score=4, player2_score=7)

        assert event.lead == -3
        assert event.leader == Side.PLAYER2
        assert event.score_label == "4-7"

    def test_tied_score_has_no_leader(self) -> None:
        event = PointEvent(scoring_player=Side.PLAYER1, player1_score=3, player2_score=3)

        assert event.leader is None

    def test_negative_score_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PointEvent(scoring_player=Side.PLAYER1, player1_score=-1, player2_score=0)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PointEvent(scoring_player=Side.PLAYER1, player1_score=1, player2_score=0, rally_length=9)

    def test_events_are_immutable(self) -> None:
        event = PointEvent(scoring_player=Side.PLAYER1, player1_score=1, player2_score=0)

        with pytest.raises(ValidationError):
            event.player1_score = 5  # type: ignore[misc]

    def test_wire_values_parse_to_enums(self) -> None:
        event = PointEvent.model_validate(
            {
                "scoring_player": "player1",
                "serving_player": "player2",
                "player1_score": 1,
                "player2_score": 0,
                "shot_type": "Power Shot",
                "doubles_server_role": "partner",
            }
        )

        assert event.serving_player == Side.PLAYER2
        assert event.shot_type is not None and event.shot_type.value == "Power Shot"
        assert event.doubles_server_role is not None and event.doubles_server_role.value == "partner"


class TestMatchRecord:
    def test_json_round_trip(self, build_match) -> None:
        match = build_match("11212", sport=Sport.TENNIS)

        restored = MatchRecord.model_validate_json(match.model_dump_json())

        assert restored == match
        assert restored.has_point_detail

    def test_empty_events_allowed(self) -> None:
        match = MatchRecord(
            match_id="m",
            played_at=datetime(2025, 1, 1, 9),
            sport=Sport.PADEL,
            player1_score=6,
            player2_score=4,
            elapsed_seconds=1200,
            outcome="win",
        )

        assert match.events == ()
        assert match.is_win
        assert not match.has_point_detail

    def test_blank_match_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MatchRecord(
                match_id="",
                played_at=datetime(2025, 1, 1),
                sport=Sport.PICKLEBALL,
                player1_score=0,
                player2_score=0,
                elapsed_seconds=0,
                outcome="loss",
            )


class TestDerivedRates:
    def test_empty_serve_partitions_report_zero(self) -> None:
        serve = ServeInsights()

        assert serve.your_serve_win_rate == 0.0
        assert serve.partner_serve_win_rate == 0.0
        assert serve.return_defense_rate == 0.0
        assert serve.return_win_rate == 0.0

    def test_clutch_rates(self) -> None:
        clutch = ClutchInsights(
            game_points_played=4, game_points_won=3, break_points_played=0, break_points_converted=0
        )

        assert clutch.clutch_rate == pytest.approx(0.75)
        assert clutch.break_point_conversion_rate == 0.0

    def test_rates_are_serialized(self) -> None:
        dumped = ServeInsights(you_served_points=4, you_served_points_won=1).model_dump()

        assert dumped["your_serve_win_rate"] == pytest.approx(0.25)


class TestExperienceState:
    def test_from_total_derives_level_and_progress(self) -> None:
        state = ExperienceState.from_total(300)

        # Level 3 starts at 250 (100 + 150); level 4 at 475 (+ 225)
        assert state.level == 3
        assert state.experience_into_level == 50
        assert state.experience_for_next_level == 225
        assert state.is_consistent

    def test_round_trip_keeps_only_stored_fields(self) -> None:
        state = ExperienceState.from_total(120)

        dumped = state.model_dump(mode="json")

        assert dumped == {"total_experience": 120, "level": 2}
        assert ExperienceState.model_validate(dumped) == state

    def test_level_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ExperienceState(total_experience=0, level=0)

    @pytest.mark.parametrize(("total", "level"), [(0, 5), (10_000, 1), (99, 2), (100, 1)])
    def test_level_must_match_total(self, total: int, level: int) -> None:
        with pytest.raises(ValidationError, match="does not match total_experience"):
            ExperienceState(total_experience=total, level=level)

    def test_validated_payload_with_wrong_level_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ExperienceState.model_validate({"total_experience": 300, "level": 1})


class TestAchievementContracts:
    def test_tier_points_and_ordering(self) -> None:
        assert [tier.points for tier in AchievementTier] == [10, 25, 50, 100, 200]
        assert AchievementTier.SILVER > AchievementTier.BRONZE
        assert AchievementTier.GOLD.label == "Gold"

    def test_definition_requires_a_tier(self) -> None:
        with pytest.raises(ValidationError):
            AchievementDefinition(
                identifier=AchievementId.VICTORIES,
                category=AchievementCategory.UNIVERSAL,
                name="Victory Milestone",
                tiers={},
            )
