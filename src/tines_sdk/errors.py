"""Error taxonomy shared by every layer of the SDK.

All failures surfaced to callers are :class:`TinesError` instances. The error
carries a coarse :class:`ErrorType`, the HTTP status code when one was
received, and the list of :class:`ErrorMessage` entries reported by the API
or produced locally.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

__all__ = [
    "ErrorType",
    "ErrorMessage",
    "TinesError",
    "ERR_EMPTY_API_KEY",
    "ERR_EMPTY_TENANT",
    "ERR_MALFORMED_TENANT",
    "ERR_DO_REQUEST",
    "ERR_UNMARSHAL",
    "ERR_READ_BODY",
    "ERR_PARSE",
]

ERR_EMPTY_API_KEY = "API Token must not be empty"
ERR_EMPTY_TENANT = "Tines Tenant must not be empty"
ERR_MALFORMED_TENANT = "Tines Tenant must be in the format https://example.tines.com/"
ERR_DO_REQUEST = "error while attempting to make the HTTP request"
ERR_UNMARSHAL = "error unmarshalling the JSON response"
ERR_READ_BODY = "error reading the HTTP response body bytes"
ERR_PARSE = "error parsing the input"


class ErrorType(str, Enum):
    """Coarse classification of a failure."""

    REQUEST = "request"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    SERVER = "server"


class ErrorMessage(BaseModel):
    """A single problem description."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    message: str = ""
    details: str = ""

    @field_validator("message", "details", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (dict, list)):
            return json.dumps(value, sort_keys=True)
        return value


class TinesError(Exception):
    """Structured error raised for failed API calls and invalid input."""

    def __init__(
        self,
        type: ErrorType = ErrorType.REQUEST,
        errors: Iterable[ErrorMessage] | None = None,
        *,
        status_code: int | None = None,
    ) -> None:
        self.type = ErrorType(type)
        self.status_code = status_code
        self.errors: list[ErrorMessage] = list(errors or [])
        super().__init__(self._render())

    @classmethod
    def single(
        cls,
        type: ErrorType,
        message: str,
        details: str,
        *,
        status_code: int | None = None,
    ) -> "TinesError":
        """Build an error holding one message."""

        return cls(type, [ErrorMessage(message=message, details=details)], status_code=status_code)

    def add(self, message: str, details: str) -> None:
        """Append a message while collecting several problems."""

        self.errors.append(ErrorMessage(message=message, details=details))
        self.args = (self._render(),)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def _render(self) -> str:
        rendered = [f"{err.message}: {err.details}" for err in self.errors if err.message]
        return f"{len(rendered)} error(s) occurred: {', '.join(rendered)}"

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.type, list(self.errors)), {"status_code": self.status_code})

    def __str__(self) -> str:
        return self._render()

    def __repr__(self) -> str:
        return (
            f"TinesError(type={self.type.value!r}, status_code={self.status_code!r}, "
            f"errors={self.errors!r})"
        )
