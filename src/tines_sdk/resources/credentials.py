"""User credentials."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tines_sdk.core.api_client import BaseTinesClient
from tines_sdk.errors import ERR_PARSE, ErrorType, TinesError
from tines_sdk.filters import ListFilter
from tines_sdk.pagination import PageMeta, PageSequence

__all__ = [
    "Credential",
    "CredentialList",
    "CredentialMultiRequest",
    "CredentialRequestOptions",
    "CredentialType",
    "CredentialsMixin",
]


class CredentialType(str, Enum):
    AWS = "AWS"
    HTTP_REQUEST_AGENT = "HTTP_REQUEST_AGENT"
    JWT = "JWT"
    MTLS = "MTLS"
    MULTI_REQUEST = "MULTI_REQUEST"
    OAUTH = "OAUTH"
    TEXT = "TEXT"


class CredentialRequestOptions(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str | None = None
    content_type: str | None = None
    method: str | None = None
    payload: dict[str, Any] | None = None
    headers: dict[str, Any] | None = None


class CredentialMultiRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    options: CredentialRequestOptions | None = None
    http_request_secret: str | None = None


class Credential(BaseModel):
    """A credential and the mode-specific payload used to create or update it.

    Which payload fields apply depends on ``mode``. ``MULTI_REQUEST``
    credentials are a form of HTTP credential and also accept
    ``http_request_location_of_token`` and ``http_request_ttl``.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int | None = None
    name: str | None = None
    mode: CredentialType | None = None
    team_id: int | None = None
    folder_id: int | None = None
    read_access: str | None = None
    shared_team_slugs: list[str] | None = None
    description: str | None = None
    metadata: dict[str, Any] | None = None
    allowed_hosts: Any = None
    test_credential_enabled: bool | None = None
    is_test: bool | None = None

    # AWS
    aws_authentication_type: str | None = None
    aws_access_key: str | None = None
    aws_secret_key: str | None = None
    aws_assumed_role_arn: str | None = None

    # HTTP_REQUEST_AGENT
    http_request_options: str | None = None
    http_request_location_of_token: str | None = None
    http_request_secret: str | None = None
    http_request_ttl: int | None = None

    # JWT
    jwt_algorithm: str | None = None
    jwt_payload: dict[str, Any] | None = None
    jwt_auto_generate_time_claims: bool | None = None
    jwt_private_key: str | None = None

    # MTLS
    mtls_client_certificate: str | None = None
    mtls_client_private_key: str | None = None
    mtls_root_certificate: str | None = None

    # MULTI_REQUEST
    credential_requests: list[CredentialMultiRequest] | None = None

    # OAUTH
    oauth_url: str | None = None
    oauth_client_id: str | None = None
    oauth_client_secret: str | None = None
    oauth_scope: str | None = None
    oauth_grant_type: str | None = None
    oauth_pkce_code_challenge_method: str | None = Field(
        default=None, alias="oauthPkceCodeChallengeMethod"
    )

    # TEXT
    value: str | None = None


class CredentialList(BaseModel):
    model_config = ConfigDict(extra="ignore")

    user_credentials: list[Credential] | None = None
    meta: PageMeta | None = None


class CredentialsMixin(BaseTinesClient):
    """Credential operations."""

    def create_credential(self, credential: Credential) -> Credential:
        errs = TinesError(ErrorType.REQUEST)
        if not credential.name:
            errs.add(ERR_PARSE, "Credential Name must not be empty")
        if credential.mode is None:
            errs.add(ERR_PARSE, "Credential Mode must not be empty")
        if not credential.team_id:
            errs.add(ERR_PARSE, "Credential Team ID must not be empty")
        if errs.has_errors():
            raise errs

        body = self.do_request("POST", "/api/v1/user_credentials", data=self._encode(credential))
        return self._decode(Credential, body)

    def get_credential(self, credential_id: int) -> Credential:
        body = self.do_request("GET", f"/api/v1/user_credentials/{credential_id}")
        return self._decode(Credential, body)

    def update_credential(self, credential: Credential) -> Credential:
        if not credential.id:
            raise TinesError.single(
                ErrorType.REQUEST, ERR_PARSE, "You must specify the Credential ID to update."
            )
        body = self.do_request(
            "PUT",
            f"/api/v1/user_credentials/{credential.id}",
            data=self._encode(credential),
        )
        return self._decode(Credential, body)

    def list_credentials(self, list_filter: ListFilter | None = None) -> PageSequence[Credential]:
        return self._list(
            "/api/v1/user_credentials",
            list_filter or ListFilter(),
            CredentialList,
            "user_credentials",
        )

    def delete_credential(self, credential_id: int) -> None:
        self.do_request("DELETE", f"/api/v1/user_credentials/{credential_id}")
