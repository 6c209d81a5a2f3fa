"""Lazy, capped sequences over paginated list endpoints."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from structlog.stdlib import BoundLogger

from tines_sdk.core.log_events import LogEvents
from tines_sdk.core.logger import UnifiedLogger
from tines_sdk.errors import TinesError
from tines_sdk.pagination.cursor import Cursor, PageMeta

__all__ = ["Page", "PageSequence", "FetchPage", "paginate"]

T = TypeVar("T")


@dataclass(slots=True)
class Page(Generic[T]):
    """One decoded page of a listing."""

    items: list[T] = field(default_factory=list)
    meta: PageMeta = field(default_factory=PageMeta)


FetchPage = Callable[[Mapping[str, Any]], Page[T]]


class PageSequence(Generic[T]):
    """Iterable over every item of a listing, up to ``max_results``.

    Each iteration run allocates its own :class:`Cursor`, fetches every
    required page, and only then starts handing items out. A failed fetch
    ends the run with that error and none of the buffered items.
    """

    def __init__(
        self,
        fetch_page: FetchPage[T],
        *,
        max_results: int = 0,
        params: Mapping[str, Any] | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        if max_results < 0:
            msg = "max_results must be a non-negative integer"
            raise ValueError(msg)
        self._fetch_page = fetch_page
        self._max_results = max_results
        self._params: dict[str, Any] = dict(params or {})
        self._log = logger or UnifiedLogger.get(__name__).bind(component="paginator")

    @property
    def max_results(self) -> int:
        return self._max_results

    def _fetch_all(self) -> list[T]:
        cursor = Cursor(self._max_results)
        params: dict[str, Any] = dict(self._params)
        buffered: list[T] = []
        page_index = 0

        self._log.debug(LogEvents.PAGINATE_RUN_STARTED, max_results=self._max_results)

        while not cursor.max_results_returned():
            try:
                page = self._fetch_page(params)
            except TinesError as exc:
                self._log.debug(
                    LogEvents.PAGINATE_FETCH_FAILED,
                    page_index=page_index,
                    discarded=len(buffered),
                    error=str(exc),
                )
                raise

            cursor.update_pagination(page.meta)
            params = cursor.next_page_params()

            for item in page.items:
                buffered.append(item)
                cursor.increment_counter()
                if cursor.max_results_returned():
                    self._log.debug(LogEvents.PAGINATE_LIMIT_REACHED, returned=cursor.current_counter())
                    break

            self._log.debug(
                LogEvents.PAGINATE_PAGE_FETCHED,
                page_index=page_index,
                items_count=len(page.items),
                buffered=len(buffered),
                next_page_number=page.meta.next_page_number,
            )
            page_index += 1

            if not cursor.return_more_results():
                self._log.debug(LogEvents.PAGINATE_RESULTS_EXHAUSTED, returned=cursor.current_counter())
                break

        return buffered

    def __iter__(self) -> Iterator[T]:
        yield from self._fetch_all()

    def iter_results(self) -> Iterator[tuple[T | None, TinesError | None]]:
        """Yield ``(item, None)`` pairs, or a single ``(None, error)`` on failure."""

        try:
            items = self._fetch_all()
        except TinesError as exc:
            yield None, exc
            return
        for item in items:
            yield item, None

    def collect(self) -> list[T]:
        return self._fetch_all()


def paginate(
    max_results: int,
    initial_params: Mapping[str, Any] | None,
    fetch_page: FetchPage[T],
    *,
    logger: BoundLogger | None = None,
) -> PageSequence[T]:
    """Build a :class:`PageSequence` for one list call."""

    return PageSequence(fetch_page, max_results=max_results, params=initial_params, logger=logger)
