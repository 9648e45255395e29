"""
Common data types and base models for the Point engine.
All models use Pydantic V2; contracts are immutable once built.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Side(str, Enum):
    """The two sides of a match. ``player1`` is always the tracked side."""

    PLAYER1 = "player1"  # You (and partner in doubles)
    PLAYER2 = "player2"  # Opponent(s)

    @property
    def other(self) -> "Side":
        return Side.PLAYER2 if self is Side.PLAYER1 else Side.PLAYER1


class Sport(str, Enum):
    """Supported racket sports."""

    PICKLEBALL = "Pickleball"
    TENNIS = "Tennis"
    PADEL = "Padel"


class GameType(str, Enum):
    """Singles or doubles play."""

    SINGLES = "Singles"
    DOUBLES = "Doubles"


class MatchOutcome(str, Enum):
    """Result from the tracked side's perspective."""

    WIN = "win"
    LOSS = "loss"


class ShotType(str, Enum):
    """Shot classification attached to a point (when the device detected one)."""

    SERVE = "Serve"
    OVERHEAD = "Overhead"
    POWER_SHOT = "Power Shot"
    TOUCH_SHOT = "Touch Shot"
    VOLLEY = "Volley"
    UNKNOWN = "Unknown"


class DoublesServerRole(str, Enum):
    """Which member of the tracked doubles team served the point."""

    SELF = "you"
    PARTNER = "partner"


class BaseContract(BaseModel):
    """Base model for all data contracts with common configuration."""

    model_config = ConfigDict(
        # Contracts are values: never mutated after construction
        frozen=True,
        # Forbid extra fields to ensure data integrity
        extra="forbid",
        json_schema_extra={"examples": []},
    )
