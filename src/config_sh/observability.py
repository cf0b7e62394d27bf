"""Structured logging helpers shared by every layer.

Purpose
    Keep every emission of logging data predictable and contextual while the
    library stays silent until a host (normally the CLI) installs a handler.

Contents
    - ``TRACE_ID``: context variable storing the active trace identifier.
    - ``TRACE``: custom level below ``DEBUG`` for very chatty diagnostics.
    - ``get_logger``: returns the shared package logger (quiet by default).
    - ``bind_trace_id``: binds or clears the active trace identifier.
    - ``log_trace`` / ``log_debug`` / ``log_info`` / ``log_error``: emit
      structured entries via a single private emitter.
    - ``make_event``: convenience builder for structured event payloads.
    - ``parse_level`` / ``configure_logging``: translate the configured verbosity
      name into a handler on the package logger; ``reset_logging`` removes it.

System Integration
    Adapters, the resolver and the bootstrap log through these helpers. The CLI
    calls :func:`configure_logging` with the value of ``core.log.level``.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Any, Final, Mapping, TextIO

TRACE_ID: ContextVar[str | None] = ContextVar("config_sh_trace_id", default=None)
"""Current trace identifier propagated through logging helpers."""

TRACE: Final[int] = 5
logging.addLevelName(TRACE, "TRACE")

OFF: Final[int] = logging.CRITICAL + 10

_LEVELS: Final[dict[str, int]] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
    "off": OFF,
}

_LOGGER: Final[logging.Logger] = logging.getLogger("config_sh")
_LOGGER.addHandler(logging.NullHandler())

_FORMAT: Final[str] = "[%(asctime)s %(levelname)s %(name)s] %(message)s"
_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S%z"


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    Examples
    --------
    >>> bind_trace_id('abc123')
    >>> TRACE_ID.get()
    'abc123'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_trace(message: str, **fields: Any) -> None:
    _emit(TRACE, message, fields)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug log entry that includes the trace context."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info log entry that includes the trace context."""

    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error log entry that includes the trace context."""

    _emit(logging.ERROR, message, fields)


def make_event(
    scope: str,
    path: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a structured logging payload for a configuration scope.

    Examples
    --------
    >>> make_event('env', None, {'keys': 3})
    {'scope': 'env', 'path': None, 'keys': 3}
    """

    event: dict[str, Any] = {"scope": scope, "path": path}
    if payload:
        event |= dict(payload)
    return event


def parse_level(name: str | None) -> int:
    """Map a configured verbosity name to a :mod:`logging` level.

    Names are case-insensitive. A missing name switches logging off and an
    unrecognised one falls back to ``error``.

    Examples
    --------
    >>> parse_level("DEBUG") == logging.DEBUG
    True
    >>> parse_level("chatty") == logging.ERROR
    True
    >>> parse_level(None) == OFF
    True
    """

    if name is None:
        return OFF
    return _LEVELS.get(name.strip().lower(), logging.ERROR)


class ContextFormatter(logging.Formatter):
    """Append the structured ``context`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        rendered = super().format(record)
        context = getattr(record, "context", None)
        if not context:
            return rendered
        pairs = " ".join(f"{key}={value}" for key, value in context.items() if value is not None)
        return f"{rendered} {pairs}" if pairs else rendered


def configure_logging(level: str | int | None, *, stream: TextIO | None = None) -> logging.Handler:
    """Attach a stream handler to the package logger at *level*.

    Repeated calls replace the handler installed by the previous call, so the
    CLI may reconfigure after the resolver has been assembled. Records go to
    stderr unless *stream* is given; stdout carries command output.
    """

    resolved = level if isinstance(level, int) else parse_level(level)
    reset_logging()
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ContextFormatter(_FORMAT, _DATE_FORMAT))
    handler._config_sh_owned = True  # type: ignore[attr-defined]
    _LOGGER.addHandler(handler)
    _LOGGER.setLevel(resolved)
    log_trace("logger_configured", level=logging.getLevelName(resolved))
    return handler


def reset_logging() -> None:
    """Remove handlers installed by :func:`configure_logging` and restore the default level."""

    for handler in list(_LOGGER.handlers):
        if getattr(handler, "_config_sh_owned", False):
            _LOGGER.removeHandler(handler)
    _LOGGER.setLevel(logging.NOTSET)


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a log entry through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": _with_trace(fields)})


def _with_trace(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Attach the current trace identifier to the provided structured fields."""

    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    return context
