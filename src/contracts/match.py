"""
Match record contract.
This is the core data structure handed to the engine once a match is final.
"""

from datetime import datetime

from pydantic import Field

from .common import BaseContract, GameType, MatchOutcome, Sport
from .events import PointEvent


class MatchRecord(BaseContract):
    """A finished match with its chronological point log."""

    match_id: str = Field(..., min_length=1, description="Host-assigned match identifier")
    played_at: datetime = Field(..., description="Local start time of the match")
    sport: Sport
    game_type: GameType = Field(GameType.SINGLES)

    # Final scores
    player1_score: int = Field(..., ge=0, description="Tracked side final score")
    player2_score: int = Field(..., ge=0, description="Opponent final score")
    player1_games_won: int = Field(0, ge=0, description="Games won (tennis/padel sets)")
    player2_games_won: int = Field(0, ge=0)

    elapsed_seconds: float = Field(..., ge=0, description="Match duration in seconds")
    outcome: MatchOutcome

    # Empty when the source device recorded no point-level detail
    events: tuple[PointEvent, ...] = Field(default_factory=tuple)

    @property
    def is_win(self) -> bool:
        return self.outcome == MatchOutcome.WIN

    @property
    def is_doubles(self) -> bool:
        return self.game_type == GameType.DOUBLES

    @property
    def has_point_detail(self) -> bool:
        """Whether there is enough point-level signal to derive insights."""
        return len(self.events) > 1

    @property
    def score_label(self) -> str:
        return f"{self.player1_score}-{self.player2_score}"
