"""Per-match insights: serve, momentum, clutch, highlights and story."""

from .calculator import (
    calculate_clutch_insights,
    calculate_serve_insights,
    compute_insights,
)
from .highlights import extract_key_moments, longest_run
from .momentum import calculate_momentum_insights, count_lead_changes
from .story import tell_match_story

__all__ = [
    "calculate_clutch_insights",
    "calculate_momentum_insights",
    "calculate_serve_insights",
    "compute_insights",
    "count_lead_changes",
    "extract_key_moments",
    "longest_run",
    "tell_match_story",
]
