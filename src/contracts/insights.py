"""Per-match insight contracts.

Output of the insights calculator. Counts are stored; rates are computed
fields so they can never drift from the counts they are derived from.
"""

from enum import Enum

from pydantic import Field, computed_field

from src.core.utils.ratios import safe_ratio

from .common import BaseContract, Sport


class ServeInsights(BaseContract):
    """Serve and return efficiency for the tracked side."""

    you_served_points: int = Field(0, ge=0)
    you_served_points_won: int = Field(0, ge=0)
    partner_served_points: int = Field(0, ge=0)
    partner_served_points_won: int = Field(0, ge=0)
    opponent_served_points: int = Field(0, ge=0)
    # Rally scoring: tracked side won the rally on the opponent's serve
    side_outs_defended: int = Field(0, ge=0)
    # Server-advantage scoring: tracked side broke the opponent's serve
    break_points_won: int = Field(0, ge=0)
    opponent_points_label: str = Field(
        "Break points won", description="Label for points won on the opponent's serve"
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def your_serve_win_rate(self) -> float:
        return safe_ratio(self.you_served_points_won, self.you_served_points)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def partner_serve_win_rate(self) -> float:
        return safe_ratio(self.partner_served_points_won, self.partner_served_points)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def return_defense_rate(self) -> float:
        return safe_ratio(self.side_outs_defended, self.opponent_served_points)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def return_win_rate(self) -> float:
        return safe_ratio(self.break_points_won, self.opponent_served_points)


class MomentumInsights(BaseContract):
    """Runs, lead changes and largest leads from a single left-to-right scan."""

    your_max_streak: int = Field(0, ge=0)
    opponent_max_streak: int = Field(0, ge=0)
    lead_changes: int = Field(0, ge=0)
    your_biggest_lead: int = Field(0, ge=0)
    opponent_biggest_lead: int = Field(0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def summary(self) -> str:
        if self.your_max_streak > self.opponent_max_streak + 2:
            return f"You dominated momentum with a {self.your_max_streak}-point run"
        if self.opponent_max_streak > self.your_max_streak + 2:
            return f"Opponent had momentum with a {self.opponent_max_streak}-point run"
        if self.lead_changes > 5:
            return f"Back-and-forth battle with {self.lead_changes} lead changes"
        return "Evenly contested match"


class ClutchInsights(BaseContract):
    """Pressure-point opportunities and how many were converted."""

    game_points_played: int = Field(0, ge=0, description="10-10+ in pickleball, deuce elsewhere")
    game_points_won: int = Field(0, ge=0)
    break_points_played: int = Field(0, ge=0, description="Opponent serving, tracked side ahead")
    break_points_converted: int = Field(0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def clutch_rate(self) -> float:
        return safe_ratio(self.game_points_won, self.game_points_played)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def break_point_conversion_rate(self) -> float:
        return safe_ratio(self.break_points_converted, self.break_points_played)


class HighlightKind(str, Enum):
    """Key moment categories, in extraction order."""

    SCORING_RUN = "scoring_run"
    COMEBACK = "comeback"
    CLUTCH_POINT = "clutch_point"
    SERVICE_WINNER = "service_winner"
    OPPONENT_RUN = "opponent_run"


class KeyMoment(BaseContract):
    """A single highlight worth surfacing after the match."""

    kind: HighlightKind
    title: str
    description: str
    score: str = Field(..., description="Score snapshot as 'you-opponent'")
    is_positive: bool = True


class StoryType(str, Enum):
    """Whole-match narrative buckets."""

    WIRE_TO_WIRE = "wire_to_wire"
    COMEBACK = "comeback"
    BLOWN_LEAD = "blown_lead"
    DOMINANT = "dominant"
    NAIL_BITER = "nail_biter"
    BACK_AND_FORTH = "back_and_forth"
    STANDARD = "standard"


class MatchStory(BaseContract):
    """Headline summary of how the match unfolded."""

    story_type: StoryType
    headline: str
    description: str


class InsightsResult(BaseContract):
    """Everything derived from one match's point log."""

    match_id: str
    sport: Sport
    is_doubles: bool
    serve: ServeInsights
    momentum: MomentumInsights
    clutch: ClutchInsights
    key_moments: tuple[KeyMoment, ...] = Field(default_factory=tuple)
    story: MatchStory
