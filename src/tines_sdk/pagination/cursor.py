"""Pagination state tracking for list endpoints."""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qsl, urlsplit

from pydantic import BaseModel, ConfigDict

__all__ = ["PageMeta", "Cursor"]


class PageMeta(BaseModel):
    """Pagination block returned under ``meta`` by every list endpoint."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    current_page: str | None = None
    previous_page: str | None = None
    next_page: str | None = None
    next_page_number: int | None = None
    per_page: int | None = None
    pages: int | None = None
    count: int | None = None


class Cursor:
    """Track how far a listing has progressed and whether to keep going.

    ``max_requested`` of ``0`` means the caller wants every available result.
    """

    def __init__(self, max_requested: int = 0) -> None:
        if max_requested < 0:
            msg = "max_requested must be a non-negative integer"
            raise ValueError(msg)
        self.meta = PageMeta()
        self.max_requested = max_requested
        self._total_returned = 0

    def update_pagination(self, meta: PageMeta) -> None:
        self.meta = meta

    def more_results_available(self) -> bool:
        return (self.meta.next_page_number or 0) > 0

    def increment_counter(self) -> None:
        self._total_returned += 1

    def current_counter(self) -> int:
        return self._total_returned

    def max_results_returned(self) -> bool:
        if self.max_requested == 0:
            return False
        return self._total_returned >= self.max_requested

    def return_more_results(self) -> bool:
        """Whether another page should be requested."""

        return self.more_results_available() and not self.max_results_returned()

    def next_page_params(self) -> dict[str, Any]:
        """Query parameters encoded in the server-provided ``next_page`` link.

        Only the first value of a repeated key is kept. A missing or
        unparsable link yields an empty mapping.
        """

        if not self.meta.next_page:
            return {}
        try:
            query = urlsplit(self.meta.next_page).query
        except ValueError:
            return {}
        params: dict[str, Any] = {}
        for key, value in parse_qsl(query, keep_blank_values=True):
            params.setdefault(key, value)
        return params

    def __repr__(self) -> str:
        return (
            f"Cursor(returned={self._total_returned}, requested={self.max_requested}, "
            f"next_page_number={self.meta.next_page_number!r})"
        )
