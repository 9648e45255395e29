"""
Experience and level contracts.

Only ``total_experience`` and ``level`` are stored; the in-level progress
figures are derived from them through the leveling curve.
"""

from pydantic import Field, model_validator

from src.core.leveling.curve import cumulative_experience_for, level_for_experience

from .common import BaseContract


class ExperienceState(BaseContract):
    """Persisted experience counters for one profile."""

    total_experience: int = Field(0, ge=0)
    level: int = Field(1, ge=1)

    @model_validator(mode="after")
    def _level_matches_total(self) -> "ExperienceState":
        expected = level_for_experience(self.total_experience)
        if self.level != expected:
            raise ValueError(
                f"level {self.level} does not match total_experience "
                f"{self.total_experience} (expected level {expected})"
            )
        return self

    @classmethod
    def from_total(cls, total_experience: int) -> "ExperienceState":
        """Rebuild a consistent state from total experience alone."""
        return cls(
            total_experience=total_experience,
            level=level_for_experience(total_experience),
        )

    @property
    def experience_into_level(self) -> int:
        return self.total_experience - cumulative_experience_for(self.level)

    @property
    def experience_for_next_level(self) -> int:
        return cumulative_experience_for(self.level + 1) - cumulative_experience_for(self.level)

    @property
    def is_consistent(self) -> bool:
        """Whether the level agrees with the total (always true once validated)."""
        return self.level == level_for_experience(self.total_experience)


class ExperienceAwardLine(BaseContract):
    """One labelled component of an experience award."""

    label: str
    amount: int = Field(..., ge=0)


class ExperienceAward(BaseContract):
    """Experience earned for one match, with its reasoned breakdown."""

    match_id: str
    total_awarded: int = Field(0, ge=0)
    breakdown: tuple[ExperienceAwardLine, ...] = Field(default_factory=tuple)
    leveled_up: bool = False

    def amount_for(self, label: str) -> int:
        """Amount awarded under ``label`` (0 when absent)."""
        return sum(line.amount for line in self.breakdown if line.label == label)


class ExperienceAwardResult(BaseContract):
    """An award together with the state it produced."""

    award: ExperienceAward
    state: ExperienceState
    previous_level: int = Field(1, ge=1)

    @property
    def levels_gained(self) -> int:
        return self.state.level - self.previous_level
