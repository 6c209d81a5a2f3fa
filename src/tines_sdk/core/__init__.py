"""Logging and response handling primitives shared by the SDK."""

from .log_events import LogEvents
from .logger import (
    DEFAULT_LOG_LEVEL,
    LogConfig,
    LogFormat,
    UnifiedLogger,
    configure_logging,
    get_logger,
)
from .responses import classify_response, extract_error_messages

__all__ = [
    "DEFAULT_LOG_LEVEL",
    "LogConfig",
    "LogEvents",
    "LogFormat",
    "UnifiedLogger",
    "classify_response",
    "configure_logging",
    "extract_error_messages",
    "get_logger",
]
