"""Stories and story versions."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from tines_sdk.core.api_client import BaseTinesClient
from tines_sdk.filters import ListFilter
from tines_sdk.pagination import PageMeta, PageSequence

__all__ = [
    "Story",
    "StoryImportMode",
    "StoryImportRequest",
    "StoryList",
    "StoryVersion",
    "StoryVersionCreateRequest",
    "StoriesMixin",
]

_EXPORT = TypeAdapter(dict[str, Any])


class StoryImportMode(str, Enum):
    NEW = "new"
    VERSION_REPLACE = "versionReplace"


class Story(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int | None = None
    name: str | None = None
    user_id: int | None = None
    description: str | None = None
    keep_events_for: int | None = None
    disabled: bool | None = None
    priority: bool | None = None
    send_to_story_enabled: bool | None = None
    send_to_story_access_source: str | None = None
    send_to_story_access: str | None = None
    send_to_story_skill_use_requires_confirmation: bool | None = None
    shared_team_slugs: list[str] | None = None
    entry_agent_id: int | None = None
    exit_agents: list[int] | None = None
    team_id: int | None = None
    tags: list[str] | None = None
    guid: str | None = None
    slug: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    edited_at: str | None = None
    mode: str | None = None
    folder_id: int | None = None
    published: bool | None = None
    change_control_enabled: bool | None = None
    locked: bool | None = None
    owners: list[int] | None = None


class StoryList(BaseModel):
    model_config = ConfigDict(extra="ignore")

    stories: list[Story] | None = None
    meta: PageMeta | None = None


class StoryImportRequest(BaseModel):
    """Payload for importing a story export, optionally replacing an existing story."""

    model_config = ConfigDict(extra="forbid")

    new_name: str
    data: dict[str, Any]
    team_id: int
    folder_id: int | None = None
    mode: StoryImportMode = StoryImportMode.NEW


class StoryVersion(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str | None = None
    description: str | None = None
    timestamp: str | None = None


class StoryVersionCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    draft_id: int | None = Field(default=None, gt=0)


class StoriesMixin(BaseTinesClient):
    """Story operations."""

    def create_story(self, story: Story) -> Story:
        """Create a story with an empty storyboard.

        To manage storyboard contents, :meth:`import_story` is the
        recommended approach.
        """

        body = self.do_request("POST", "/api/v1/stories", data=self._encode(story))
        return self._decode(Story, body)

    def get_story(self, story_id: int) -> Story:
        body = self.do_request("GET", f"/api/v1/stories/{story_id}")
        return self._decode(Story, body)

    def update_story(self, story_id: int, values: Story) -> Story:
        body = self.do_request("PUT", f"/api/v1/stories/{story_id}", data=self._encode(values))
        return self._decode(Story, body)

    def list_stories(self, list_filter: ListFilter | None = None) -> PageSequence[Story]:
        """Iterate over stories, optionally filtered by team, folder or status.

        Every page is fetched until the listing is exhausted or
        ``list_filter.max_results`` stories have been collected::

            for story in client.list_stories(ListFilter(max_results=10)):
                print(story.name)
        """

        return self._list("/api/v1/stories", list_filter or ListFilter(), StoryList, "stories")

    def delete_story(self, story_id: int) -> None:
        self.do_request("DELETE", f"/api/v1/stories/{story_id}")

    def batch_delete_stories(self, story_ids: list[int]) -> None:
        self.do_request(
            "DELETE",
            "/api/v1/stories/batch",
            data=self._encode({"ids": list(story_ids)}),
        )

    def export_story(self, story_id: int, *, randomize_urls: bool = False) -> dict[str, Any]:
        """Export storyboard contents and metadata.

        URLs such as webhook endpoints are kept as-is unless
        ``randomize_urls`` is set; randomize them before sharing an export.
        """

        params = {"randomize_urls": True} if randomize_urls else None
        body = self.do_request("GET", f"/api/v1/stories/{story_id}/export", params=params)
        return self._decode_any(_EXPORT, body)

    def import_story(self, request: StoryImportRequest) -> Story:
        body = self.do_request("POST", "/api/v1/stories/import", data=self._encode(request))
        return self._decode(Story, body)

    def create_story_version(self, story_id: int, request: StoryVersionCreateRequest) -> StoryVersion:
        body = self.do_request(
            "POST",
            f"/api/v1/stories/{story_id}/versions",
            data=self._encode(request),
        )
        return self._decode(StoryVersion, body)
