"""Registry of structured logging event identifiers."""

from __future__ import annotations

from enum import Enum, auto

__all__ = ["LogEvents"]


class LogEvents(str, Enum):
    """Strongly typed registry of log events emitted by the SDK.

    Member names follow ``NAMESPACE_ACTION_OUTCOME`` and render as dotted
    identifiers, e.g. ``HTTP_REQUEST_COMPLETED`` -> ``http.request.completed``.
    """

    @staticmethod
    def _generate_next_value_(name: str, start: int, count: int, _last_values: list[str]) -> str:
        parts = name.lower().split("_")
        namespace = parts[0] if parts else "event"
        suffix = parts[-1] if len(parts) > 1 else "event"
        action_parts = parts[1:-1] if len(parts) > 2 else ["event"]
        return ".".join((namespace, ".".join(action_parts), suffix))

    def __str__(self) -> str:
        return str(self.value)

    CLIENT_CONFIG_INVALID = auto()
    CLIENT_SESSION_CLOSED = auto()
    HTTP_REQUEST_STARTED = auto()
    HTTP_REQUEST_COMPLETED = auto()
    HTTP_REQUEST_FAILED = auto()
    HTTP_REQUEST_EXCEPTION = auto()
    HTTP_PARAMS_DROPPED = auto()
    HTTP_RESPONSE_UNDECODABLE = auto()
    PAGINATE_RUN_STARTED = auto()
    PAGINATE_PAGE_FETCHED = auto()
    PAGINATE_FETCH_FAILED = auto()
    PAGINATE_LIMIT_REACHED = auto()
    PAGINATE_RESULTS_EXHAUSTED = auto()
    CLI_RUN_START = auto()
    CLI_RUN_FINISH = auto()
    CLI_RUN_ERROR = auto()
