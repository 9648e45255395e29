"""Key moment extraction and match story tests."""

import pytest

from src.contracts.common import ShotType, Side
from src.contracts.insights import HighlightKind, StoryType
from src.core.insights import extract_key_moments, longest_run, tell_match_story


# ============================================================================
# Key moments
# ============================================================================


class TestKeyMoments:
    def test_scoring_run_reports_score_at_its_end(self, build_match) -> None:
        moments = extract_key_moments(build_match("11121"))

        assert [m.kind for m in moments] == [HighlightKind.SCORING_RUN]
        assert moments[0].title == "3-Point Run"
        assert moments[0].description == "Scored 3 consecutive points"
        assert moments[0].score == "3-0"
        assert moments[0].is_positive

    def test_short_runs_are_not_highlights(self, build_match) -> None:
        assert extract_key_moments(build_match("1121", outcome="win")) == []

    def test_comeback_reported_where_lead_was_retaken(self, build_match) -> None:
        moments = extract_key_moments(build_match("2222211111" + "1"))

        assert [m.kind for m in moments] == [HighlightKind.SCORING_RUN, HighlightKind.COMEBACK]
        comeback = moments[1]
        assert comeback.description == "Overcame a 5-point deficit"
        assert comeback.score == "6-5"

    def test_comeback_uses_largest_overturned_deficit(self, build_match) -> None:
        # Down 0-3, lead at 4-3; down 4-8, lead again at 9-8
        moments = extract_key_moments(build_match("222" + "1111" + "22222" + "11111"))

        comeback = next(m for m in moments if m.kind == HighlightKind.COMEBACK)
        assert comeback.description == "Overcame a 4-point deficit"
        assert comeback.score == "9-8"

    def test_deficit_never_overturned_is_not_a_comeback(self, build_match) -> None:
        moments = extract_key_moments(build_match("22221111", outcome="loss"))

        assert HighlightKind.COMEBACK not in {m.kind for m in moments}

    def test_latest_clutch_point(self, build_match) -> None:
        # 9-9, 9-10, 10-10, 11-10
        moments = extract_key_moments(build_match("12" * 9 + "211"))

        clutch = next(m for m in moments if m.kind == HighlightKind.CLUTCH_POINT)
        assert clutch.description == "Scored under pressure at 10-10"
        assert clutch.score == "11-10"

    def test_first_service_winner(self, build_match) -> None:
        match = build_match(
            "1211",
            servers="1111",
            shots=[ShotType.VOLLEY, ShotType.SERVE, ShotType.SERVE, ShotType.SERVE],
        )

        moments = extract_key_moments(match)

        winner = next(m for m in moments if m.kind == HighlightKind.SERVICE_WINNER)
        assert winner.title == "Service Winner"
        assert winner.score == "2-1"

    def test_opponent_run_only_on_a_loss(self, build_match) -> None:
        moments = extract_key_moments(build_match("1222212"))

        assert [m.kind for m in moments] == [HighlightKind.OPPONENT_RUN]
        assert moments[0].description == "They scored 4 in a row"
        assert moments[0].score == "1-4"
        assert moments[0].is_positive is False

        won = extract_key_moments(build_match("22221111111"))
        assert HighlightKind.OPPONENT_RUN not in {m.kind for m in won}

    def test_fixed_order(self, build_match) -> None:
        match = build_match(
            "22222" + "12" * 4 + "111111" + "1212" + "1",
            servers="2" * 13 + "1" * 11,
            shots=[None] * 23 + [ShotType.SERVE],
        )

        kinds = [m.kind for m in extract_key_moments(match)]

        assert kinds == [
            HighlightKind.SCORING_RUN,
            HighlightKind.COMEBACK,
            HighlightKind.CLUTCH_POINT,
            HighlightKind.SERVICE_WINNER,
        ]

    def test_no_events_no_moments(self, build_match) -> None:
        assert extract_key_moments(build_match("", player1_score=11, player2_score=3)) == []

    def test_longest_run_prefers_earliest_on_ties(self, build_events) -> None:
        events = build_events("1121122")

        length, end = longest_run(events, Side.PLAYER1)

        assert length == 2
        assert end is events[1]


# ============================================================================
# Match story
# ============================================================================


@pytest.mark.parametrize(
    ("scorers", "story_type", "headline"),
    [
        ("11121", StoryType.WIRE_TO_WIRE, "Wire-to-Wire Victory!"),
        ("2222211111" + "11", StoryType.COMEBACK, "Epic Comeback!"),
        ("11111" + "2222222", StoryType.BLOWN_LEAD, "Couldn't Hold On"),
        ("2" + "1" * 10, StoryType.DOMINANT, "Dominant Performance!"),
        ("1212121222", StoryType.NAIL_BITER, "So Close!"),
        ("2222" + "11111" + "22" + "11" + "22" + "11", StoryType.BACK_AND_FORTH, "Battle of Wills!"),
        ("211111", StoryType.STANDARD, "Nice Win!"),
        ("122222", StoryType.STANDARD, "Better Luck Next Time"),
    ],
)
def test_story_priority(build_match, scorers: str, story_type: StoryType, headline: str) -> None:
    story = tell_match_story(build_match(scorers))

    assert story.story_type == story_type
    assert story.headline == headline


def test_story_descriptions_carry_the_numbers(build_match) -> None:
    assert "down 5 points" in tell_match_story(build_match("2222211111" + "11")).description
    assert "5-point lead" in tell_match_story(build_match("11111" + "2222222")).description
    assert "9-point lead" in tell_match_story(build_match("2" + "1" * 10)).description


def test_story_without_events_falls_back_to_default(build_match) -> None:
    story = tell_match_story(build_match("", player1_score=11, player2_score=5))

    assert story.story_type == StoryType.STANDARD
    assert story.headline == "Nice Win!"
