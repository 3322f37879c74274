"""Structured JSON logging utilities for screening session tracing."""
from __future__ import annotations

import contextvars
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Literal, Mapping

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

_session_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "screening_session_id",
    default=None,
)
_turn_id_ctx: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "screening_turn_id",
    default=None,
)

_level_map: dict[LogLevelName, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def _get_logger() -> logging.Logger:
    logger = logging.getLogger("screening_agent.structured")
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def set_session_id(session_id: str | None) -> None:
    """Store the active screening session id for the current context."""
    _session_id_ctx.set(session_id)


def get_session_id() -> str | None:
    """Return the active screening session id."""
    return _session_id_ctx.get()


def set_turn_id(turn_id: int | None) -> None:
    """Store the active turn id (the answered question ordinal) for the current context."""
    _turn_id_ctx.set(turn_id)


def get_turn_id() -> int | None:
    """Return the active turn id."""
    return _turn_id_ctx.get()


def clear_log_context() -> None:
    """Reset session and turn tracing metadata for the current context."""
    set_session_id(None)
    set_turn_id(None)


def _iso_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def log_event(
    *,
    component: str,
    event: str,
    level: LogLevelName = "INFO",
    session_id: str | None = None,
    turn_id: int | None = None,
    details: Mapping[str, Any] | None = None,
) -> None:
    """Emit a structured JSON log line to stdout."""
    resolved_session_id = session_id if session_id is not None else get_session_id()
    resolved_turn_id = turn_id if turn_id is not None else get_turn_id()
    payload: dict[str, Any] = {
        "ts": _iso_timestamp(),
        "level": level,
        "component": component,
        "event": event,
        "session_id": resolved_session_id,
        "turn_id": resolved_turn_id,
        "details": dict(details or {}),
    }
    _get_logger().log(_level_map[level], json.dumps(payload, ensure_ascii=True, separators=(",", ":")))


def _duration_to_ms(duration_s: float) -> float:
    if duration_s < 0:
        return 0.0
    return round(duration_s * 1000.0, 3)


def log_latency_event(
    *,
    component: str,
    event: str,
    duration_s: float,
    status: str,
    level: LogLevelName = "INFO",
    details: Mapping[str, Any] | None = None,
) -> None:
    """Emit a log event carrying the duration and status of one turn."""
    payload_details = dict(details or {})
    payload_details.update(
        {
            "status": status,
            "duration_ms": _duration_to_ms(duration_s),
        }
    )
    log_event(
        component=component,
        event=event,
        level=level,
        details=payload_details,
    )
