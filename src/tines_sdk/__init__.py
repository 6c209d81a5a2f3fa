"""Python client for the Tines workflow-automation API."""

from __future__ import annotations

from tines_sdk.client import TinesClient
from tines_sdk.config import ClientConfig, load_config
from tines_sdk.core.responses import classify_response, extract_error_messages
from tines_sdk.errors import ErrorMessage, ErrorType, TinesError
from tines_sdk.filters import ListFilter, StoryFilter, StoryOrder
from tines_sdk.pagination import Cursor, Page, PageMeta, PageSequence, paginate

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "Cursor",
    "ErrorMessage",
    "ErrorType",
    "ListFilter",
    "Page",
    "PageMeta",
    "PageSequence",
    "StoryFilter",
    "StoryOrder",
    "TinesClient",
    "TinesError",
    "classify_response",
    "extract_error_messages",
    "load_config",
    "paginate",
]
