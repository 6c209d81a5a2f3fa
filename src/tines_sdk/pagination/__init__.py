"""Cursor tracking and lazy sequences for paginated list endpoints."""

from __future__ import annotations

from .cursor import Cursor, PageMeta
from .sequence import FetchPage, Page, PageSequence, paginate

__all__ = [
    "Cursor",
    "FetchPage",
    "Page",
    "PageMeta",
    "PageSequence",
    "paginate",
]
