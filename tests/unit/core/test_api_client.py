"""Request-execution tests for :class:`tines_sdk.core.api_client.BaseTinesClient`."""

from __future__ import annotations

import pytest
import requests

from tines_sdk.client import TinesClient
from tines_sdk.config import ClientConfig, client_version
from tines_sdk.core.api_client import coerce_params
from tines_sdk.errors import (
    ERR_DO_REQUEST,
    ERR_EMPTY_API_KEY,
    ERR_PARSE,
    ERR_UNMARSHAL,
    ErrorType,
    TinesError,
)

from tests.support.http import StubResponse, StubSession


@pytest.mark.unit
class TestCoerceParams:
    def test_scalars_are_stringified(self) -> None:
        pairs, dropped = coerce_params({"s": "x", "i": 3, "f": 2.0, "t": True, "n": False})

        assert pairs == [("s", "x"), ("i", "3"), ("f", "2"), ("t", "true"), ("n", "false")]
        assert dropped == []

    def test_lists_become_repeated_keys(self) -> None:
        pairs, _ = coerce_params({"tags": ["a", "b"]})

        assert pairs == [("tags", "a"), ("tags", "b")]

    def test_unsupported_values_are_dropped(self) -> None:
        pairs, dropped = coerce_params({"obj": {"a": 1}, "none": None, "ok": 1})

        assert pairs == [("ok", "1")]
        assert dropped == ["obj", "none"]

    def test_missing_params(self) -> None:
        assert coerce_params(None) == ([], [])


@pytest.mark.unit
class TestClientConstruction:
    def test_invalid_config_is_rejected(self) -> None:
        with pytest.raises(TinesError) as excinfo:
            TinesClient(ClientConfig(tenant_url="https://example.tines.com/"))

        assert [err.details for err in excinfo.value.errors] == [ERR_EMPTY_API_KEY]

    def test_from_settings(self) -> None:
        session = StubSession()
        client = TinesClient.from_settings(
            tenant_url="https://example.tines.com/",
            api_key="foo",
            session=session,  # type: ignore[arg-type]
        )

        assert isinstance(client, TinesClient)
        assert client.config.api_key == "foo"

    @pytest.mark.parametrize(
        "settings",
        [{"timeout_sec": -1}, {"colour": "blue"}],
    )
    def test_from_settings_reports_bad_values_as_tines_error(self, settings: dict[str, object]) -> None:
        with pytest.raises(TinesError) as excinfo:
            TinesClient.from_settings(tenant_url="https://example.tines.com/", api_key="k", **settings)

        error = excinfo.value
        assert error.type is ErrorType.REQUEST
        assert [err.message for err in error.errors] == [ERR_PARSE]
        assert error.errors[0].details.startswith(next(iter(settings)))

    def test_context_manager_closes_session(self, client_config: ClientConfig) -> None:
        session = StubSession()
        with TinesClient(client_config, session=session):  # type: ignore[arg-type]
            pass

        assert session.closed is True


@pytest.mark.unit
class TestDoRequest:
    def test_headers_identify_and_authenticate(self, client: TinesClient, session: StubSession) -> None:
        session.queue(StubResponse(200, {}))

        client.do_request("GET", "/api/v1/info")

        headers = session.calls[0]["headers"]
        assert headers["x-user-token"] == "foo"
        assert headers["Authorization"] == "Bearer foo"
        assert headers["content-type"] == "application/json"
        assert headers["Accept"] == "application/json"
        assert headers["User-Agent"].startswith("TinesPythonSdk/")
        assert headers["x-tines-client-version"] == f"tines-python-sdk-{client_version()}"

    def test_extra_headers_cannot_override_auth(self, client_config: ClientConfig) -> None:
        session = StubSession([StubResponse(200, {})])
        config = client_config.with_options(headers={"X-Trace": "1", "x-user-token": "spoof"})
        client = TinesClient(config, session=session)  # type: ignore[arg-type]

        client.do_request("GET", "/api/v1/info")

        headers = session.calls[0]["headers"]
        assert headers["X-Trace"] == "1"
        assert headers["x-user-token"] == "foo"

    @pytest.mark.parametrize(
        ("tenant_url", "expected"),
        [
            ("https://example.tines.com/", "https://example.tines.com/api/v1/stories"),
            ("https://example.tines.com", "https://example.tines.com/api/v1/stories"),
            ("https://example.com/tines/", "https://example.com/tines/api/v1/stories"),
        ],
    )
    def test_path_is_joined_to_tenant(self, tenant_url: str, expected: str) -> None:
        session = StubSession([StubResponse(200, {})])
        client = TinesClient(ClientConfig(tenant_url=tenant_url, api_key="k"), session=session)  # type: ignore[arg-type]

        client.do_request("GET", "api/v1/stories")

        assert session.calls[0]["url"] == expected

    def test_query_params_and_body_are_forwarded(self, client: TinesClient, session: StubSession) -> None:
        session.queue(StubResponse(201, {"id": 1}))

        body = client.do_request("POST", "/api/v1/things", params={"page": 2, "flag": True}, data=b"{}")

        call = session.calls[0]
        assert call["method"] == "POST"
        assert call["params"] == [("page", "2"), ("flag", "true")]
        assert call["data"] == b"{}"
        assert call["timeout"] == client.config.timeout
        assert body == b'{"id": 1}'

    def test_no_params_sends_none(self, client: TinesClient, session: StubSession) -> None:
        session.queue(StubResponse(200, {}))

        client.do_request("GET", "/api/v1/info")

        assert session.calls[0]["params"] is None

    def test_transport_failure_is_request_error(self, client: TinesClient, session: StubSession) -> None:
        session.queue(requests.ConnectionError("connection refused"))

        with pytest.raises(TinesError) as excinfo:
            client.do_request("GET", "/api/v1/info")

        error = excinfo.value
        assert error.type is ErrorType.REQUEST
        assert error.status_code is None
        assert error.errors[0].message == ERR_DO_REQUEST
        assert "connection refused" in error.errors[0].details
        assert isinstance(error.__cause__, requests.ConnectionError)

    def test_error_status_is_classified(self, client: TinesClient, session: StubSession) -> None:
        session.queue(StubResponse(404, {"errors": [{"message": "Not Found", "details": "no story"}]}))

        with pytest.raises(TinesError) as excinfo:
            client.get_story(99)

        assert excinfo.value.status_code == 404
        assert str(excinfo.value) == "1 error(s) occurred: Not Found: no story"

    def test_undecodable_success_body_is_server_error(self, client: TinesClient, session: StubSession) -> None:
        session.queue(StubResponse(200, content=b"<html>maintenance</html>"))

        with pytest.raises(TinesError) as excinfo:
            client.get_story(1)

        assert excinfo.value.type is ErrorType.SERVER
        assert excinfo.value.errors[0].message == ERR_UNMARSHAL
