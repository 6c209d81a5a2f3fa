"""HTTP plumbing shared by every resource-specific client operation."""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any, TypeVar
from urllib.parse import urlsplit, urlunsplit

import requests
from pydantic import BaseModel, TypeAdapter, ValidationError
from requests.exceptions import RequestException
from structlog.stdlib import BoundLogger

from tines_sdk.config import (
    ClientConfig,
    build_client_config,
    client_version,
    validate_client_config,
)
from tines_sdk.core.log_events import LogEvents
from tines_sdk.core.logger import UnifiedLogger
from tines_sdk.core.responses import classify_response
from tines_sdk.errors import (
    ERR_DO_REQUEST,
    ERR_PARSE,
    ERR_READ_BODY,
    ERR_UNMARSHAL,
    ErrorType,
    TinesError,
)
from tines_sdk.filters import ListFilter
from tines_sdk.pagination import Page, PageMeta, PageSequence, paginate

__all__ = ["BaseTinesClient", "coerce_params"]

ModelT = TypeVar("ModelT", bound=BaseModel)
ItemT = TypeVar("ItemT")

_SCALARS = (str, bool, int, float)


def _coerce_scalar(value: Any) -> str:
    # bool must be checked before int.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format(value, ".0f")
    return str(value)


def coerce_params(params: Mapping[str, Any] | None) -> tuple[list[tuple[str, str]], list[str]]:
    """Flatten ``params`` into query pairs.

    Scalars are converted to their query-string form and lists of scalars
    become repeated keys. Returns the pairs plus the names of parameters that
    could not be represented and were left out.
    """

    pairs: list[tuple[str, str]] = []
    dropped: list[str] = []
    for key, value in (params or {}).items():
        if isinstance(value, _SCALARS):
            pairs.append((key, _coerce_scalar(value)))
        elif isinstance(value, (list, tuple)) and all(isinstance(v, _SCALARS) for v in value):
            pairs.extend((key, _coerce_scalar(v)) for v in value)
        else:
            dropped.append(key)
    return pairs, dropped


class BaseTinesClient:
    """Authenticated request execution against a single tenant."""

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: requests.Session | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._log = logger or UnifiedLogger.get(__name__).bind(component="tines_client")
        try:
            validate_client_config(config)
        except TinesError as exc:
            self._log.warning(LogEvents.CLIENT_CONFIG_INVALID, error=str(exc))
            raise
        self.config = config
        self._session = session or requests.Session()

    @classmethod
    def from_settings(
        cls,
        *,
        session: requests.Session | None = None,
        logger: BoundLogger | None = None,
        **settings: Any,
    ) -> "BaseTinesClient":
        """Create a client from keyword settings, e.g. ``tenant_url`` and ``api_key``."""

        return cls(build_client_config(settings), session=session, logger=logger)

    def close(self) -> None:
        self._session.close()
        self._log.debug(LogEvents.CLIENT_SESSION_CLOSED)

    def __enter__(self) -> "BaseTinesClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Request execution
    # ------------------------------------------------------------------

    def do_request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        data: bytes | None = None,
    ) -> bytes:
        """Send one request and return the raw body of a successful response."""

        url = self._resolve_url(path)
        query, dropped = coerce_params(params)
        if dropped:
            self._log.warning(LogEvents.HTTP_PARAMS_DROPPED, endpoint=url, params=dropped)

        self._log.debug(LogEvents.HTTP_REQUEST_STARTED, method=method, endpoint=url, params=query)
        start = time.perf_counter()
        try:
            response = self._session.request(
                method,
                url,
                params=query or None,
                data=data,
                headers=self._headers(),
                timeout=self.config.timeout,
            )
        except RequestException as exc:
            self._log.warning(
                LogEvents.HTTP_REQUEST_EXCEPTION,
                method=method,
                endpoint=url,
                error=str(exc),
            )
            raise TinesError.single(ErrorType.REQUEST, ERR_DO_REQUEST, str(exc)) from exc

        try:
            body = response.content
        except RequestException as exc:
            raise TinesError.single(
                ErrorType.SERVER,
                ERR_READ_BODY,
                str(exc),
                status_code=response.status_code,
            ) from exc

        duration_ms = (time.perf_counter() - start) * 1000
        if response.status_code >= 400:
            self._log.debug(
                LogEvents.HTTP_REQUEST_FAILED,
                method=method,
                endpoint=url,
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
        else:
            self._log.debug(
                LogEvents.HTTP_REQUEST_COMPLETED,
                method=method,
                endpoint=url,
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
        return classify_response(response.status_code, body)

    def _headers(self) -> dict[str, str]:
        headers = dict(self.config.headers)
        headers.update(
            {
                "content-type": "application/json",
                "Accept": "application/json",
                "User-Agent": self.config.effective_user_agent,
                "x-tines-client-version": f"tines-python-sdk-{client_version()}",
                "x-user-token": self.config.api_key,
                "Authorization": f"Bearer {self.config.api_key}",
            }
        )
        return headers

    def _resolve_url(self, path: str) -> str:
        try:
            tenant = urlsplit(self.config.tenant_url)
        except ValueError as exc:
            raise TinesError.single(ErrorType.REQUEST, ERR_PARSE, str(exc)) from exc
        if not tenant.scheme or not tenant.netloc:
            raise TinesError.single(
                ErrorType.REQUEST,
                ERR_PARSE,
                f"invalid tenant URL {self.config.tenant_url!r}",
            )
        joined = f"{tenant.path.rstrip('/')}/{path.lstrip('/')}"
        return urlunsplit((tenant.scheme, tenant.netloc, joined, "", ""))

    # ------------------------------------------------------------------
    # Decoding helpers
    # ------------------------------------------------------------------

    def _decode(self, model: type[ModelT], body: bytes) -> ModelT:
        try:
            return model.model_validate_json(body)
        except ValidationError as exc:
            self._log.warning(LogEvents.HTTP_RESPONSE_UNDECODABLE, model=model.__name__, error=str(exc))
            raise TinesError.single(ErrorType.SERVER, ERR_UNMARSHAL, str(exc)) from exc

    def _decode_any(self, adapter: TypeAdapter[Any], body: bytes) -> Any:
        try:
            return adapter.validate_json(body)
        except ValidationError as exc:
            self._log.warning(LogEvents.HTTP_RESPONSE_UNDECODABLE, error=str(exc))
            raise TinesError.single(ErrorType.SERVER, ERR_UNMARSHAL, str(exc)) from exc

    @staticmethod
    def _encode(payload: BaseModel | Mapping[str, Any]) -> bytes:
        if isinstance(payload, BaseModel):
            return payload.model_dump_json(exclude_none=True, by_alias=True).encode("utf-8")
        return TypeAdapter(dict[str, Any]).dump_json(dict(payload))

    def _list(
        self,
        path: str,
        list_filter: ListFilter,
        list_model: type[BaseModel],
        items_field: str,
    ) -> PageSequence[Any]:
        """Lazy sequence over ``path`` decoding pages with ``list_model``."""

        def fetch_page(params: Mapping[str, Any]) -> Page[Any]:
            body = self.do_request("GET", path, params=params)
            decoded = self._decode(list_model, body)
            meta = getattr(decoded, "meta", None) or PageMeta()
            return Page(items=list(getattr(decoded, items_field) or []), meta=meta)

        return paginate(
            list_filter.max_results,
            list_filter.to_params(),
            fetch_page,
            logger=self._log,
        )
