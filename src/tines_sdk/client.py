"""The public :class:`TinesClient`."""

from __future__ import annotations

from tines_sdk.resources import (
    AuditLogsMixin,
    CredentialsMixin,
    FoldersMixin,
    InfoMixin,
    ResourcesMixin,
    StoriesMixin,
)

__all__ = ["TinesClient"]


class TinesClient(
    StoriesMixin,
    CredentialsMixin,
    FoldersMixin,
    ResourcesMixin,
    AuditLogsMixin,
    InfoMixin,
):
    """Client for the Tines REST API.

    The tenant URL and API key are required; a custom user agent is optional
    but recommended to identify the calling application::

        client = TinesClient.from_settings(
            tenant_url="https://example.tines.com/",
            api_key="...",
        )

    Invalid settings raise :class:`~tines_sdk.errors.TinesError` listing
    every problem found.
    """
