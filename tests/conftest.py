"""Pytest configuration and fixtures for point engine tests.

Matches are described compactly: ``"11212"`` means player1 scored, then
player1, player2, player1, player2. Scores after each point are derived from
that string so tests only spell out what matters to them.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

import pytest

from src.config.settings import get_settings
from src.contracts.common import (
    DoublesServerRole,
    GameType,
    MatchOutcome,
    ShotType,
    Side,
    Sport,
)
from src.contracts.events import PointEvent
from src.contracts.match import MatchRecord

_SIDES = {"1": Side.PLAYER1, "2": Side.PLAYER2}
_ROLES = {"y": DoublesServerRole.SELF, "p": DoublesServerRole.PARTNER}


def make_events(
    scorers: str,
    *,
    servers: str | None = None,
    roles: str | None = None,
    shots: Sequence[ShotType | None] | None = None,
    serve_points: str | None = None,
) -> tuple[PointEvent, ...]:
    """Build a chronological point log.

    ``servers`` uses ``1``/``2`` per point and ``-`` for an unknown server.
    ``roles`` uses ``y`` (you), ``p`` (partner) or ``-`` per point.
    ``serve_points`` uses ``s`` to flag serve points.
    """
    p1 = p2 = 0
    events: list[PointEvent] = []
    for index, scorer in enumerate(scorers):
        side = _SIDES[scorer]
        if side == Side.PLAYER1:
            p1 += 1
        else:
            p2 += 1
        server = servers[index] if servers else "-"
        role = roles[index] if roles else "-"
        events.append(
            PointEvent(
                timestamp=float(index * 20),
                serving_player=_SIDES.get(server),
                scoring_player=side,
                player1_score=p1,
                player2_score=p2,
                shot_type=shots[index] if shots else None,
                doubles_server_role=_ROLES.get(role),
                is_serve_point=bool(serve_points) and serve_points[index] == "s",
            )
        )
    return tuple(events)


def make_match(
    scorers: str = "",
    *,
    match_id: str = "match-1",
    sport: Sport = Sport.PICKLEBALL,
    game_type: GameType = GameType.SINGLES,
    outcome: MatchOutcome | None = None,
    player1_score: int | None = None,
    player2_score: int | None = None,
    elapsed_seconds: float = 600.0,
    played_at: datetime = datetime(2025, 3, 12, 18, 30),
    events: Sequence[PointEvent] | None = None,
    **event_options,
) -> MatchRecord:
    """Build a finished match; final scores and outcome default from ``scorers``."""
    if events is None:
        events = make_events(scorers, **event_options) if scorers else ()
    p1 = scorers.count("1") if player1_score is None else player1_score
    p2 = scorers.count("2") if player2_score is None else player2_score
    if outcome is None:
        outcome = MatchOutcome.WIN if p1 > p2 else MatchOutcome.LOSS
    return MatchRecord(
        match_id=match_id,
        played_at=played_at,
        sport=sport,
        game_type=game_type,
        player1_score=p1,
        player2_score=p2,
        elapsed_seconds=elapsed_seconds,
        outcome=outcome,
        events=tuple(events),
    )


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def build_events() -> Callable[..., tuple[PointEvent, ...]]:
    return make_events


@pytest.fixture
def build_match() -> Callable[..., MatchRecord]:
    return make_match


@pytest.fixture
def settings_override(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    """Temporarily override fields on the global settings object."""
    settings = get_settings()

    def _apply(**changes: object) -> None:
        for name, value in changes.items():
            monkeypatch.setattr(settings, name, value)

    return _apply
