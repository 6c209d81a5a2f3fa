"""Folders group credentials, resources or stories within a team."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from tines_sdk.core.api_client import BaseTinesClient
from tines_sdk.errors import ERR_PARSE, ErrorType, TinesError
from tines_sdk.filters import ListFilter
from tines_sdk.pagination import PageMeta, PageSequence

__all__ = ["Folder", "FolderList", "FoldersMixin", "FOLDER_CONTENT_TYPES"]

FOLDER_CONTENT_TYPES: tuple[str, ...] = ("CREDENTIAL", "RESOURCE", "STORY")


class Folder(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str | None = None
    team_id: int | None = None
    content_type: str | None = None
    size: int | None = None


class FolderList(BaseModel):
    model_config = ConfigDict(extra="ignore")

    folders: list[Folder] | None = None
    meta: PageMeta | None = None


class FoldersMixin(BaseTinesClient):
    """Folder operations."""

    def create_folder(self, folder: Folder) -> Folder:
        """Create a folder. Name, team and content type are required."""

        errs = TinesError(ErrorType.REQUEST)
        if not folder.name:
            errs.add(ERR_PARSE, "Folder Name must not be empty")
        if folder.content_type not in FOLDER_CONTENT_TYPES:
            errs.add(
                ERR_PARSE,
                'Folder Content Type must be one of "CREDENTIAL", "RESOURCE", or "STORY"',
            )
        if not folder.team_id:
            errs.add(ERR_PARSE, "Folder Team ID must not be empty")
        if errs.has_errors():
            raise errs

        payload = Folder(name=folder.name, content_type=folder.content_type, team_id=folder.team_id)
        body = self.do_request("POST", "/api/v1/folders", data=self._encode(payload))
        return self._decode(Folder, body)

    def get_folder(self, folder_id: int) -> Folder:
        body = self.do_request("GET", f"/api/v1/folders/{folder_id}")
        return self._decode(Folder, body)

    def update_folder(self, folder_id: int, name: str) -> Folder:
        """Rename a folder; no other attribute can be changed in place."""

        body = self.do_request("PUT", f"/api/v1/folders/{folder_id}", params={"name": name})
        return self._decode(Folder, body)

    def list_folders(self, list_filter: ListFilter | None = None) -> PageSequence[Folder]:
        """Iterate over folders, optionally filtered by team and content type."""

        return self._list("/api/v1/folders", list_filter or ListFilter(), FolderList, "folders")

    def delete_folder(self, folder_id: int) -> None:
        self.do_request("DELETE", f"/api/v1/folders/{folder_id}")
