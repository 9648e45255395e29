"""
Point event model.
One event is recorded per rally won; the score fields hold the score *after* the point.
"""

from pydantic import Field

from .common import BaseContract, DoublesServerRole, ShotType, Side


class PointEvent(BaseContract):
    """A single scoring event within a match."""

    timestamp: float = Field(0.0, ge=0, description="Seconds since the match started")
    serving_player: Side | None = Field(None, description="Side serving the point, if known")
    scoring_player: Side = Field(..., description="Side that won the point")
    player1_score: int = Field(..., ge=0, description="Tracked side score after the point")
    player2_score: int = Field(..., ge=0, description="Opponent score after the point")
    shot_type: ShotType | None = Field(None, description="Detected winning shot, if any")
    doubles_server_role: DoublesServerRole | None = Field(
        None, description="Doubles only: which tracked player served"
    )
    is_serve_point: bool = Field(False, description="Point decided while on serve")

    @property
    def lead(self) -> int:
        """Signed score differential from the tracked side's view."""
        return self.player1_score - self.player2_score

    @property
    def leader(self) -> Side | None:
        if self.player1_score > self.player2_score:
            return Side.PLAYER1
        if self.player2_score > self.player1_score:
            return Side.PLAYER2
        return None

    @property
    def score_label(self) -> str:
        return f"{self.player1_score}-{self.player2_score}"
