"""Structured logging and call tracing for the point engine.

``configure_logging`` installs the structlog pipeline once at import time.
``traced`` wraps engine entry points: it binds an ``execution_id`` for the
duration of the call and logs start, finish (with duration) or failure.
"""

import functools
import json
import logging
import sys
import time
import traceback
from collections.abc import Callable
from typing import Any, TypeVar, cast

import structlog
from pydantic import BaseModel
from structlog.contextvars import bind_contextvars, unbind_contextvars

from src.config.settings import Settings, get_settings

F = TypeVar("F", bound=Callable[..., Any])

# Namespaces whose level follows APP_LOG_LEVEL: the trace logger and the
# package's own module loggers. Handlers and the root logger belong to the host.
ENGINE_LOGGER = "point_engine"
ENGINE_LOGGER_NAMES = (ENGINE_LOGGER, __name__.partition(".")[0])


def app_context(settings: Settings) -> Callable[[Any, str, dict[str, Any]], dict[str, Any]]:
    """Processor stamping the application name and environment on each event."""

    def _add_app_context(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("app", settings.app_name)
        event_dict.setdefault("env", settings.app_env)
        return event_dict

    return _add_app_context


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog on top of the host's stdlib logging.

    Only the engine's own loggers get their level from ``APP_LOG_LEVEL``.
    The JSON renderer is used in production, when ``LOG_JSON`` is set or when
    stderr is not a terminal; otherwise the console renderer.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.app_log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    for name in ENGINE_LOGGER_NAMES:
        logging.getLogger(name).setLevel(level)

    if settings.log_json or settings.is_production or not sys.stderr.isatty():
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            app_context(settings),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.dict_tracebacks,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Unbound loggers keep structlog.testing.capture_logs working
        cache_logger_on_first_use=False,
    )


configure_logging()

logger = structlog.get_logger(f"{ENGINE_LOGGER}.trace")


def _serialize_value(value: Any, max_length: int = 1000) -> Any:
    """JSON-safe form of ``value`` for a log line, truncated to ``max_length``."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_unset=True)

    try:
        encoded = json.dumps(value, default=str)
    except (TypeError, ValueError):
        encoded = None

    if encoded is None:
        text = str(value)
        return text if len(text) <= max_length else text[:max_length] + "..."
    if len(encoded) > max_length:
        return encoded[:max_length] + "..."
    return json.loads(encoded)


def traced(
    *,
    capture_result: bool = True,
    capture_args: bool = True,
    max_arg_length: int = 1000,
    log_level: str = "INFO",
) -> Callable[[F], F]:
    """Log entry, exit and failure of the wrapped function.

    Exceptions are logged with their traceback and re-raised unchanged. With
    ``TRACE_ENABLED`` false the wrapper calls straight through.

    Example:
        >>> @traced(capture_result=False)
        ... def compute(match_id: str) -> dict:
        ...     return {"match_id": match_id}
    """
    level = logging.getLevelName(log_level.upper())

    def decorator(func: F) -> F:
        qualified_name = f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if not get_settings().trace_enabled:
                return func(*args, **kwargs)

            execution_id = f"{qualified_name}_{time.time_ns() // 1000}"
            call_args: list[Any] | None = None
            call_kwargs: dict[str, Any] | None = None
            if capture_args:
                call_args = [_serialize_value(arg, max_arg_length) for arg in args]
                call_kwargs = {
                    name: _serialize_value(value, max_arg_length)
                    for name, value in kwargs.items()
                }

            bind_contextvars(execution_id=execution_id)
            logger.log(
                level,
                f"Executing function: {qualified_name}",
                execution_id=execution_id,
                args=call_args,
                kwargs=call_kwargs,
            )
            started = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                logger.error(
                    f"Error in function: {qualified_name}",
                    execution_id=execution_id,
                    duration_ms=(time.perf_counter() - started) * 1000,
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                    traceback=traceback.format_exc(),
                    args=call_args,
                    kwargs=call_kwargs,
                )
                raise
            else:
                logger.log(
                    level,
                    f"Successfully executed: {qualified_name}",
                    execution_id=execution_id,
                    duration_ms=(time.perf_counter() - started) * 1000,
                    result=_serialize_value(result, max_arg_length) if capture_result else None,
                )
                return result
            finally:
                unbind_contextvars("execution_id")

        return cast(F, wrapper)

    return decorator


def trace_critical(func: F) -> F:
    """Full tracing for state-changing entry points."""
    return traced(capture_result=True, capture_args=True, log_level="INFO")(func)


def trace_performance(func: F) -> F:
    """Duration-only tracing at DEBUG for hot calculator paths."""
    return traced(capture_result=False, capture_args=False, log_level="DEBUG")(func)
