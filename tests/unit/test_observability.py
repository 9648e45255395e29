import logging
from typing import Any

import pytest
import structlog
from structlog.contextvars import get_contextvars
from structlog.testing import capture_logs

from src.config.settings import Settings
from src.contracts.experience import ExperienceState
from src.core import metrics
from src.core.observability import (
    _serialize_value,
    app_context,
    configure_logging,
    trace_critical,
    trace_performance,
    traced,
)


def test_traced_logs_entry_and_exit_with_execution_id() -> None:
    @traced(log_level="INFO")
    def _double(value: int) -> int:
        return value * 2

    with capture_logs() as cap:
        assert _double(21) == 42

    assert len(cap) == 2
    entry, exit_ = cap
    assert entry["event"].startswith("Executing function:")
    assert entry["args"] == [21]
    assert exit_["event"].startswith("Successfully executed:")
    assert exit_["result"] == 42
    assert entry["execution_id"] == exit_["execution_id"]
    assert "_double" in entry["execution_id"]


def test_execution_id_is_bound_only_during_the_call() -> None:
    seen: dict[str, Any] = {}

    @trace_critical
    def _capture() -> None:
        seen.update(get_contextvars())

    _capture()

    assert "execution_id" in seen
    assert "execution_id" not in get_contextvars()


def test_errors_are_logged_and_reraised() -> None:
    @trace_critical
    def _boom() -> None:
        raise RuntimeError("store unavailable")

    with capture_logs() as cap, pytest.raises(RuntimeError):
        _boom()

    error = cap[-1]
    assert error["log_level"] == "error"
    assert error["error_type"] == "RuntimeError"
    assert error["error_message"] == "store unavailable"
    assert "Traceback" in error["traceback"]
    assert "execution_id" not in get_contextvars()


def test_trace_performance_skips_arguments_and_results() -> None:
    @trace_performance
    def _compute(state: ExperienceState) -> int:
        return state.total_experience

    with capture_logs() as cap:
        assert _compute(ExperienceState(total_experience=5)) == 5

    assert [entry["log_level"] for entry in cap] == ["debug", "debug"]
    assert cap[0]["args"] is None
    assert cap[1]["result"] is None
    assert cap[1]["duration_ms"] >= 0


def test_tracing_can_be_disabled(settings_override) -> None:
    settings_override(trace_enabled=False)

    @trace_critical
    def _noop() -> str:
        return "ok"

    with capture_logs() as cap:
        assert _noop() == "ok"

    assert cap == []


def test_serialize_value_handles_models_and_long_values() -> None:
    assert _serialize_value(ExperienceState(total_experience=120, level=2)) == {
        "total_experience": 120,
        "level": 2,
    }
    assert _serialize_value({"a": 1}) == {"a": 1}

    truncated = _serialize_value("x" * 50, max_length=10)
    assert truncated.endswith("...")
    assert len(truncated) == 13


def test_render_latest_exposes_engine_metrics() -> None:
    payload, content_type = metrics.render_latest()

    assert b"point_insights_computed_total" in payload
    assert b"point_experience_award_size" in payload
    assert content_type.startswith("text/plain")


def test_app_context_stamps_name_and_environment() -> None:
    processor = app_context(Settings(app_name="scoreboard", app_env="staging"))

    event = processor(None, "info", {"event": "match recorded"})

    assert event["app"] == "scoreboard"
    assert event["env"] == "staging"
    # Explicit values on the event win
    assert processor(None, "info", {"event": "x", "env": "replay"})["env"] == "replay"


def test_configure_logging_leaves_the_root_logger_alone() -> None:
    root = logging.getLogger()
    root_level, root_handlers = root.level, list(root.handlers)

    try:
        configure_logging(Settings(app_log_level="DEBUG"))

        assert root.level == root_level
        assert root.handlers == root_handlers
        assert logging.getLogger("point_engine").level == logging.DEBUG
        assert logging.getLogger("point_engine.trace").getEffectiveLevel() == logging.DEBUG
        assert logging.getLogger("src").level == logging.DEBUG
    finally:
        configure_logging()


def test_production_always_renders_json() -> None:
    production = Settings(app_env="production", log_json=False)
    assert production.is_production

    try:
        configure_logging(production)

        renderer = structlog.get_config()["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)
    finally:
        configure_logging()
