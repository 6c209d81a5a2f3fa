"""Filters accepted by the list endpoints."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["StoryFilter", "StoryOrder", "ListFilter", "DEFAULT_MAX_RESULTS"]

DEFAULT_MAX_RESULTS = 100
MIN_PER_PAGE = 20
MAX_PER_PAGE = 500


class StoryFilter(str, Enum):
    """Single-status filter for the story listing."""

    API_ENABLED = "API_ENABLED"
    CHANGE_CONTROL_ENABLED = "CHANGE_CONTROL_ENABLED"
    DISABLED = "DISABLED"
    FAVORITE = "FAVORITE"
    HIGH_PRIORITY = "HIGH_PRIORITY"
    LOCKED = "LOCKED"
    PUBLISHED = "PUBLISHED"
    SEND_TO_STORY_ENABLED = "SEND_TO_STORY_ENABLED"


class StoryOrder(str, Enum):
    """Sort order for the story listing."""

    ACTION_COUNT_ASC = "ACTION_COUNT_ASC"
    ACTION_COUNT_DESC = "ACTION_COUNT_DESC"
    NAME = "NAME"
    NAME_DESC = "NAME_DESC"
    LEAST_RECENTLY_EDITED = "LEAST_RECENTLY_EDITED"
    RECENTLY_EDITED = "RECENTLY_EDITED"


def _now_rfc3339() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def _normalize_timestamp(value: str) -> str:
    """Coerce ``value`` to RFC 3339, falling back to a bare date, then to now."""

    candidate = value.strip()
    try:
        parsed = datetime.fromisoformat(candidate.replace("Z", "+00:00"))
    except ValueError:
        parsed = None
    if parsed is not None and parsed.tzinfo is not None and "T" in candidate:
        return parsed.isoformat().replace("+00:00", "Z")
    try:
        day = date.fromisoformat(candidate)
    except ValueError:
        return _now_rfc3339()
    return f"{day.isoformat()}T00:00:00Z"


class ListFilter(BaseModel):
    """Query options shared by every list endpoint.

    Only the fields an endpoint understands have any effect; the rest are
    ignored by the server. ``max_results`` caps the number of items the SDK
    hands back (``0`` means no cap) and is never sent to the API.

    Example::

        lf = ListFilter(team_id=1, per_page=50).with_options(max_results=10)
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    team_id: int | None = None
    folder_id: int | None = None
    content_type: str | None = None
    before: str | None = None
    after: str | None = None
    user_id: int | None = None
    operation_name: str | None = None
    filter: StoryFilter | None = None
    order: StoryOrder | None = None
    tags: list[str] | None = None
    per_page: int | None = None
    page: int | None = None
    max_results: int = Field(default=DEFAULT_MAX_RESULTS, ge=0, exclude=True)

    @field_validator("team_id", "user_id")
    @classmethod
    def _positive_ids_only(cls, value: int | None) -> int | None:
        if value is None or value <= 0:
            return None
        return value

    @field_validator("content_type")
    @classmethod
    def _upper_content_type(cls, value: str | None) -> str | None:
        return value.upper() if value else value

    @field_validator("before", "after")
    @classmethod
    def _rfc3339(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _normalize_timestamp(value)

    @field_validator("per_page")
    @classmethod
    def _clamp_per_page(cls, value: int | None) -> int | None:
        if value is None:
            return None
        return max(MIN_PER_PAGE, min(MAX_PER_PAGE, value))

    def with_options(self, **changes: Any) -> "ListFilter":
        """Return a validated copy with ``changes`` applied."""

        payload = self.model_dump(exclude_none=True)
        payload["max_results"] = self.max_results
        payload.update(changes)
        return ListFilter.model_validate(payload)

    def to_params(self) -> dict[str, Any]:
        """Query parameters for the first page; empty and zero values are omitted."""

        params: dict[str, Any] = {}
        for key, value in self.model_dump(mode="json", exclude_none=True).items():
            if value in ("", 0, []):
                continue
            params[key] = value
        return params
