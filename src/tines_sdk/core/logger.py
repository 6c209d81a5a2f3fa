"""Structured logging setup shared by the client, the paginator and the CLI.

The SDK never configures logging on import. Applications either call
:func:`configure_logging` (the ``tines-sdk`` command does) or leave the
events to their own :mod:`logging` setup, in which case they arrive as
key-value lines on the ``tines_sdk.*`` loggers.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, MutableMapping, Sequence
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any, Final, cast

import structlog
from structlog.contextvars import (
    bind_contextvars,
    clear_contextvars,
    get_contextvars,
    unbind_contextvars,
)
from structlog.exceptions import DropEvent
from structlog.stdlib import BoundLogger

__all__ = [
    "LogFormat",
    "LogConfig",
    "DEFAULT_LOG_LEVEL",
    "configure_logging",
    "get_logger",
    "UnifiedLogger",
]


class LogFormat(str, Enum):
    """Renderers selectable through :class:`LogConfig`."""

    JSON = "json"
    KEY_VALUE = "key_value"


DEFAULT_LOG_LEVEL = logging.WARNING

_ROOT_LOGGER: Final[str] = "tines_sdk"
_REDACTED: Final[str] = "***REDACTED***"
_METHOD_LEVELS: Mapping[str, int] = {
    "critical": logging.CRITICAL,
    "exception": logging.ERROR,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}
_KEY_VALUE_ORDER: Sequence[str] = ("timestamp", "level", "component", "message")


@dataclass(frozen=True, slots=True)
class LogConfig:
    """Level, renderer and the event keys whose values are masked."""

    level: int | str = DEFAULT_LOG_LEVEL
    format: LogFormat = LogFormat.JSON
    redact_fields: Sequence[str] = ("api_key", "x-user-token", "authorization")


def _coerce_log_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unsupported log level: {level}")
    return resolved


def _redact(
    _: Any,
    __: str,
    event_dict: MutableMapping[str, Any],
    *,
    fields: Iterable[str],
) -> MutableMapping[str, Any]:
    masked = {name.lower() for name in fields}
    for key in list(event_dict):
        if key.lower() in masked:
            event_dict[key] = _REDACTED
    headers = event_dict.get("headers")
    if isinstance(headers, Mapping):
        event_dict["headers"] = {
            name: _REDACTED if name.lower() in masked else value for name, value in headers.items()
        }
    return event_dict


def _drop_below_level(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    target = logger or logging.getLogger(_ROOT_LOGGER)
    if not target.isEnabledFor(_METHOD_LEVELS.get(method_name.lower(), logging.INFO)):
        raise DropEvent
    return event_dict


def _processors(config: LogConfig) -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.EventRenamer("message"),
        partial(_redact, fields=config.redact_fields),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(format: LogFormat) -> Any:
    if format is LogFormat.KEY_VALUE:
        return structlog.processors.KeyValueRenderer(
            key_order=_KEY_VALUE_ORDER,
            drop_missing=True,
            repr_native_str=False,
        )
    return structlog.processors.JSONRenderer(sort_keys=True, ensure_ascii=False)


def configure_logging(config: LogConfig | None = None) -> None:
    """Route structlog and stdlib records through one stderr handler."""

    cfg = config or LogConfig()
    level = _coerce_log_level(cfg.level)
    processors = _processors(cfg)

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[*processors, _drop_below_level],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(cfg.format),
            ],
        )
    )
    logging.basicConfig(handlers=[handler], level=level, force=True)

    structlog.configure(
        processors=[
            *processors,
            _drop_below_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = _ROOT_LOGGER) -> BoundLogger:
    """Return a bound logger for ``name``.

    Until :func:`configure_logging` has run, events are rendered as
    key-value text and handed to the standard :mod:`logging` logger of the
    same name, so the host application's levels and handlers apply.
    """

    if structlog.is_configured():
        return cast(BoundLogger, structlog.get_logger(name))
    return cast(
        BoundLogger,
        structlog.wrap_logger(
            logging.getLogger(name),
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.processors.KeyValueRenderer(key_order=["event"], repr_native_str=False),
            ],
            wrapper_class=BoundLogger,
        ),
    )


class UnifiedLogger:
    """Single entry point for logging configuration and context binding."""

    @staticmethod
    def configure(config: LogConfig | None = None) -> None:
        configure_logging(config)

    @staticmethod
    def get(name: str | None = None) -> BoundLogger:
        return get_logger(name or _ROOT_LOGGER)

    @staticmethod
    def bind(**context: Any) -> None:
        """Attach ``context`` to every later event in the current context."""

        bind_contextvars(**context)

    @staticmethod
    def reset() -> None:
        clear_contextvars()

    @staticmethod
    def scoped(**context: Any) -> AbstractContextManager[None]:
        """Bind ``context`` for the duration of a ``with`` block.

        Keys that were already bound get their previous values back on exit.
        """

        @contextmanager
        def _scope() -> Iterator[None]:
            previous = {key: value for key, value in get_contextvars().items() if key in context}
            bind_contextvars(**context)
            try:
                yield None
            finally:
                unbind_contextvars(*context)
                if previous:
                    bind_contextvars(**previous)

        return _scope()
