"""
Prometheus metrics for the point engine.

Metric definitions and helpers live here so instrumentation is not scattered
across modules. Everything registers on a private registry; ``render_latest``
produces the exposition payload for whatever host wants to serve it.

Helpers never raise into domain code and are no-ops when
``METRICS_ENABLED`` is false.
"""

from __future__ import annotations

import contextlib

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from src.config.settings import get_settings

# Global registry
_registry = CollectorRegistry()

# ============================================================================
# Counters
# ============================================================================

point_insights_computed_total = Counter(
    "point_insights_computed_total",
    "Insight computations by sport and availability",
    labelnames=("sport", "available"),
    registry=_registry,
)

point_tier_crossings_total = Counter(
    "point_tier_crossings_total",
    "Achievement tiers reached for the first time",
    labelnames=("achievement", "tier"),
    registry=_registry,
)

point_experience_awarded_total = Counter(
    "point_experience_awarded_total",
    "Experience points awarded across all matches",
    registry=_registry,
)

point_level_ups_total = Counter(
    "point_level_ups_total",
    "Levels gained across all profiles",
    registry=_registry,
)

# ============================================================================
# Histograms
# ============================================================================

point_experience_award_size = Histogram(
    "point_experience_award_size",
    "Experience awarded per match",
    buckets=(50, 75, 100, 125, 150, 200),
    registry=_registry,
)


# ============================================================================
# Helper Functions
# ============================================================================


def _enabled() -> bool:
    return get_settings().metrics_enabled


def mark_insights(sport: str, *, available: bool) -> None:
    """Count one insights computation.

    Args:
        sport: Sport label (e.g., 'Pickleball')
        available: False when the match had too few events for insights
    """
    if not _enabled():
        return
    with contextlib.suppress(Exception):
        point_insights_computed_total.labels(sport=sport, available=str(available).lower()).inc()


def mark_tier_crossing(achievement: str, tier: str) -> None:
    """Count an achievement tier reached for the first time."""
    if not _enabled():
        return
    with contextlib.suppress(Exception):
        point_tier_crossings_total.labels(achievement=achievement, tier=tier).inc()


def mark_experience_awarded(amount: int) -> None:
    """Record one match award.

    Args:
        amount: Experience awarded for the match (non-negative)
    """
    if not _enabled():
        return
    with contextlib.suppress(Exception):
        point_experience_awarded_total.inc(amount)
        point_experience_award_size.observe(amount)


def mark_level_up(levels: int = 1) -> None:
    """Count levels gained by a single award."""
    if not _enabled():
        return
    with contextlib.suppress(Exception):
        point_level_ups_total.inc(levels)


def render_latest() -> tuple[bytes, str]:
    """Render latest metrics for Prometheus scraping.

    Returns:
        Tuple of (payload bytes, content_type string)
    """
    try:
        return (generate_latest(_registry), CONTENT_TYPE_LATEST)
    except Exception:
        return (b"# Error generating metrics\n", "text/plain; charset=utf-8")
