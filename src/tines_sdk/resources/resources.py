"""Global resources and their elements."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict

from tines_sdk.core.api_client import BaseTinesClient
from tines_sdk.errors import ERR_PARSE, ErrorType, TinesError
from tines_sdk.filters import ListFilter
from tines_sdk.pagination import PageMeta, PageSequence

__all__ = ["Resource", "ResourceElement", "ResourceList", "ResourcesMixin"]

_MISSING_RESOURCE_ID = "You must specify the Resource ID to update."


class Resource(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str | None = None
    value: Any = None
    team_id: int | None = None
    folder_id: int | None = None
    user_id: int | None = None
    read_access: str | None = None
    shared_team_slugs: list[str] | None = None
    slug: str | None = None
    description: str | None = None
    test_resource_enabled: bool | None = None
    test_resource: Any = None
    is_test: bool | None = None
    live_resource_id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None
    referencing_action_ids: list[int] | None = None


class ResourceElement(BaseModel):
    """Key (object resources) or index (array resources) addressed element."""

    model_config = ConfigDict(extra="ignore")

    resource_id: int | None = None
    key: str | None = None
    index: int | None = None
    value: Any = None
    is_test: bool | None = None


class ResourceList(BaseModel):
    model_config = ConfigDict(extra="ignore")

    global_resources: list[Resource] | None = None
    meta: PageMeta | None = None


def _as_text(body: bytes) -> str:
    # The append endpoint answers with a bare string for string resources and
    # with an array for array resources; arrays are returned stringified.
    text = body.decode("utf-8", errors="replace")
    try:
        decoded = json.loads(text)
    except ValueError:
        return text
    if isinstance(decoded, str):
        return decoded
    return json.dumps(decoded)


class ResourcesMixin(BaseTinesClient):
    """Global resource operations."""

    def create_resource(self, resource: Resource) -> Resource:
        body = self.do_request("POST", "/api/v1/global_resources", data=self._encode(resource))
        return self._decode(Resource, body)

    def get_resource(self, resource_id: int) -> Resource:
        body = self.do_request("GET", f"/api/v1/global_resources/{resource_id}")
        return self._decode(Resource, body)

    def update_resource(self, resource_id: int, resource: Resource) -> Resource:
        if not resource.id:
            raise TinesError.single(ErrorType.REQUEST, ERR_PARSE, _MISSING_RESOURCE_ID)
        body = self.do_request(
            "PUT",
            f"/api/v1/global_resources/{resource_id}",
            data=self._encode(resource),
        )
        return self._decode(Resource, body)

    def list_resources(self, list_filter: ListFilter | None = None) -> PageSequence[Resource]:
        return self._list(
            "/api/v1/global_resources",
            list_filter or ListFilter(),
            ResourceList,
            "global_resources",
        )

    def delete_resource(self, resource_id: int) -> None:
        self.do_request("DELETE", f"/api/v1/global_resources/{resource_id}")

    def append_resource_element(self, resource_id: int, element: ResourceElement) -> str:
        """Append to a string or array resource and return the new value as text."""

        body = self.do_request(
            "POST",
            f"/api/v1/global_resources/{resource_id}/append",
            data=self._encode(element),
        )
        return _as_text(body)

    def remove_resource_element(self, resource_id: int, element: ResourceElement) -> str:
        """Remove an element by key or index; the API answers with the value as text."""

        if not element.resource_id:
            raise TinesError.single(ErrorType.REQUEST, ERR_PARSE, _MISSING_RESOURCE_ID)
        body = self.do_request(
            "POST",
            f"/api/v1/global_resources/{resource_id}/remove",
            data=self._encode(element),
        )
        return body.decode("utf-8", errors="replace")

    def replace_resource_element(self, resource_id: int, element: ResourceElement) -> ResourceElement:
        if not element.resource_id:
            raise TinesError.single(ErrorType.REQUEST, ERR_PARSE, _MISSING_RESOURCE_ID)
        body = self.do_request(
            "POST",
            f"/api/v1/global_resources/{resource_id}/replace",
            data=self._encode(element),
        )
        return self._decode(ResourceElement, body)
