"""Whole-match story: one headline and one sentence describing the match.

Stories are checked in priority order and the first match wins, so a
wire-to-wire win is never also reported as dominant.
"""

from collections.abc import Sequence

from src.contracts.common import Side
from src.contracts.events import PointEvent
from src.contracts.insights import MatchStory, StoryType
from src.contracts.match import MatchRecord
from src.core.insights.momentum import count_lead_changes
from src.core.utils.ratios import as_percentage, safe_ratio

COMEBACK_STORY_DEFICIT = 5
DOMINANT_MAX_LEAD = 7
DOMINANT_PERCENT_IN_LEAD = 80
NAIL_BITER_MAX_LEAD = 3
BACK_AND_FORTH_LEAD_CHANGES = 5


def _max_lead(events: Sequence[PointEvent]) -> int:
    return max((abs(event.lead) for event in events), default=0)


def _winner_deficit(events: Sequence[PointEvent], winner: Side) -> int:
    """Largest margin the eventual winner trailed by at any point."""
    sign = 1 if winner == Side.PLAYER1 else -1
    return max((-sign * event.lead for event in events), default=0)


def _percent_in_lead(events: Sequence[PointEvent], winner: Side) -> int:
    in_lead = sum(1 for event in events if event.leader == winner)
    return as_percentage(safe_ratio(in_lead, len(events)))


def tell_match_story(match: MatchRecord) -> MatchStory:
    """Pick the headline that best describes how ``match`` unfolded."""
    events = match.events
    won = match.is_win

    if not events:
        return _default_story(won)

    winner = Side.PLAYER1 if won else Side.PLAYER2
    swing = _winner_deficit(events, winner)
    max_lead = _max_lead(events)
    lead_changes = count_lead_changes(events)

    if won and all(event.lead >= 0 for event in events):
        return MatchStory(
            story_type=StoryType.WIRE_TO_WIRE,
            headline="Wire-to-Wire Victory!",
            description="You dominated from start to finish, never letting your opponent take the lead.",
        )

    if swing >= COMEBACK_STORY_DEFICIT:
        if won:
            return MatchStory(
                story_type=StoryType.COMEBACK,
                headline="Epic Comeback!",
                description=f"You were down {swing} points but fought back to claim victory!",
            )
        return MatchStory(
            story_type=StoryType.BLOWN_LEAD,
            headline="Couldn't Hold On",
            description=(
                f"You had a {swing}-point lead but your opponent mounted an incredible comeback."
            ),
        )

    if (
        won
        and max_lead >= DOMINANT_MAX_LEAD
        and _percent_in_lead(events, winner) >= DOMINANT_PERCENT_IN_LEAD
    ):
        return MatchStory(
            story_type=StoryType.DOMINANT,
            headline="Dominant Performance!",
            description=(
                "You controlled the game from start to finish "
                f"with a commanding {max_lead}-point lead."
            ),
        )

    if max_lead <= NAIL_BITER_MAX_LEAD:
        if won:
            return MatchStory(
                story_type=StoryType.NAIL_BITER,
                headline="Nail-Biter Victory!",
                description="Every point mattered in this incredibly close match.",
            )
        return MatchStory(
            story_type=StoryType.NAIL_BITER,
            headline="So Close!",
            description="A hard-fought battle that could have gone either way.",
        )

    if lead_changes >= BACK_AND_FORTH_LEAD_CHANGES:
        if won:
            return MatchStory(
                story_type=StoryType.BACK_AND_FORTH,
                headline="Battle of Wills!",
                description=f"Back and forth {lead_changes} times, but you had the final say!",
            )
        return MatchStory(
            story_type=StoryType.BACK_AND_FORTH,
            headline="Tough Battle",
            description=f"The lead changed {lead_changes} times in this intense match.",
        )

    return _default_story(won)


def _default_story(won: bool) -> MatchStory:
    if won:
        return MatchStory(
            story_type=StoryType.STANDARD,
            headline="Nice Win!",
            description="A solid performance to secure the victory.",
        )
    return MatchStory(
        story_type=StoryType.STANDARD,
        headline="Better Luck Next Time",
        description="Keep practicing and you'll get them next time!",
    )
