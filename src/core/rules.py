"""Per-sport scoring rules used by the insight and leveling calculators.

The table is built once at import time and never mutated. Every
sport-dependent threshold lives here so no calculator has to re-derive rules
from score values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from src.contracts.common import Sport


class ScoringModel(str, Enum):
    """How points relate to the serve."""

    RALLY = "rally"  # Either side scores on any rally (pickleball)
    SERVER_ADVANTAGE = "server_advantage"  # Deuce-style games (tennis, padel)


@dataclass(frozen=True)
class SportRules:
    """Constants for one sport."""

    sport: Sport
    scoring_model: ScoringModel
    # Rally model: both sides at or above this and within one point
    game_point_floor: int
    # Server-advantage model: both sides at or above this and tied
    deuce_floor: int
    # Server-advantage model: receiving side at or above this and ahead
    break_point_floor: int
    # Both sides at or above this make a tracked-side point a late clutch point
    late_clutch_floor: int
    # Final score a lopsided win must reach
    regulation_target: int

    @property
    def is_rally_scoring(self) -> bool:
        return self.scoring_model == ScoringModel.RALLY

    @property
    def opponent_serve_label(self) -> str:
        return "Side-outs defended" if self.is_rally_scoring else "Break points won"

    def is_game_point(self, player1_score: int, player2_score: int) -> bool:
        """Whether a score is a pressure point (10-10+ within one, or deuce)."""
        if self.is_rally_scoring:
            floor = self.game_point_floor
            return (
                player1_score >= floor
                and player2_score >= floor
                and abs(player1_score - player2_score) <= 1
            )
        floor = self.deuce_floor
        return player1_score >= floor and player2_score >= floor and player1_score == player2_score

    def is_break_point(self, player1_score: int, player2_score: int, *, opponent_serving: bool) -> bool:
        """Tracked side at the break floor and ahead on the opponent's serve.

        Rally-scoring sports have no break points; winning on the opponent's
        serve there is a side-out.
        """
        if self.is_rally_scoring or not opponent_serving:
            return False
        return player1_score >= self.break_point_floor and player1_score > player2_score


SPORT_RULES: Mapping[Sport, SportRules] = MappingProxyType(
    {
        Sport.PICKLEBALL: SportRules(
            sport=Sport.PICKLEBALL,
            scoring_model=ScoringModel.RALLY,
            game_point_floor=10,
            deuce_floor=3,
            break_point_floor=3,
            late_clutch_floor=9,
            regulation_target=11,
        ),
        Sport.TENNIS: SportRules(
            sport=Sport.TENNIS,
            scoring_model=ScoringModel.SERVER_ADVANTAGE,
            game_point_floor=10,
            deuce_floor=3,
            break_point_floor=3,
            late_clutch_floor=9,
            regulation_target=6,
        ),
        Sport.PADEL: SportRules(
            sport=Sport.PADEL,
            scoring_model=ScoringModel.SERVER_ADVANTAGE,
            game_point_floor=10,
            deuce_floor=3,
            break_point_floor=3,
            late_clutch_floor=9,
            regulation_target=6,
        ),
    }
)


def rules_for(sport: Sport) -> SportRules:
    """Return the rule set for ``sport``. The table covers every Sport member."""

    return SPORT_RULES[Sport(sport)]
