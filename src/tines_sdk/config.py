"""Client configuration models and loading utilities."""

from __future__ import annotations

from collections.abc import Mapping
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveFloat,
    SecretStr,
    ValidationError,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from tines_sdk.errors import (
    ERR_EMPTY_API_KEY,
    ERR_EMPTY_TENANT,
    ERR_MALFORMED_TENANT,
    ERR_PARSE,
    ErrorType,
    TinesError,
)

__all__ = [
    "ClientConfig",
    "build_client_config",
    "EnvironmentSettings",
    "client_version",
    "default_user_agent",
    "load_config",
    "load_environment_settings",
    "validate_client_config",
]

_DISTRIBUTION_NAME = "tines-sdk"


def client_version() -> str:
    """Installed package version, or ``"development"`` for source checkouts."""

    try:
        return version(_DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "development"


def default_user_agent() -> str:
    return f"TinesPythonSdk/{client_version()}"


class ClientConfig(BaseModel):
    """Connection settings for a single Tines tenant."""

    model_config = ConfigDict(extra="forbid")

    tenant_url: str = Field(
        default="",
        description="Base URL of the tenant, e.g. https://example.tines.com/.",
    )
    api_key: str = Field(
        default="",
        repr=False,
        description="API token sent with every request.",
    )
    user_agent: str = Field(
        default="",
        description="User-Agent header value; the SDK default is used when empty.",
    )
    timeout_sec: PositiveFloat = Field(
        default=60.0,
        description="Socket read timeout in seconds.",
    )
    connect_timeout_sec: PositiveFloat = Field(
        default=15.0,
        description="Connection timeout in seconds.",
    )
    headers: Mapping[str, str] = Field(
        default_factory=dict,
        description="Additional static headers sent with each request.",
    )

    @property
    def effective_user_agent(self) -> str:
        return self.user_agent or default_user_agent()

    @property
    def timeout(self) -> tuple[float, float]:
        return (min(self.connect_timeout_sec, self.timeout_sec), self.timeout_sec)

    def with_options(self, **changes: Any) -> "ClientConfig":
        """Return a validated copy with ``changes`` applied."""

        return ClientConfig.model_validate({**self.model_dump(), **changes})


def validate_client_config(config: ClientConfig) -> None:
    """Raise a single :class:`TinesError` listing every configuration problem."""

    errs = TinesError(ErrorType.REQUEST)

    if not config.tenant_url:
        errs.add("host error", ERR_EMPTY_TENANT)
    if not config.api_key:
        errs.add("credential error", ERR_EMPTY_API_KEY)
    # The URL is parsed again per request; only the scheme is checked here.
    if not config.tenant_url.startswith("https://"):
        errs.add("host error", ERR_MALFORMED_TENANT)

    if errs.has_errors():
        raise errs


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, Mapping):
        raise TinesError.single(
            ErrorType.REQUEST,
            ERR_PARSE,
            f"configuration file {path} must contain a mapping",
        )
    section = payload.get("tines", payload)
    if not isinstance(section, Mapping):
        raise TinesError.single(
            ErrorType.REQUEST,
            ERR_PARSE,
            f"'tines' section in {path} must be a mapping",
        )
    return dict(section)


class EnvironmentSettings(BaseSettings):
    """Typed view of the ``TINES_*`` environment variables (and a local ``.env``)."""

    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    tenant_url: str | None = Field(default=None, alias="TINES_TENANT_URL")
    api_key: SecretStr | None = Field(default=None, alias="TINES_API_KEY")
    user_agent: str | None = Field(default=None, alias="TINES_USER_AGENT")
    timeout_sec: PositiveFloat | None = Field(default=None, alias="TINES_TIMEOUT_SEC")

    @field_validator("tenant_url", "api_key", "user_agent", "timeout_sec", mode="before")
    @classmethod
    def _blank_as_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def as_overrides(self) -> dict[str, Any]:
        """Set values keyed by :class:`ClientConfig` field name."""

        overrides = self.model_dump(exclude_none=True)
        if self.api_key is not None:
            overrides["api_key"] = self.api_key.get_secret_value()
        return overrides


def _parse_error(exc: ValidationError) -> TinesError:
    errs = TinesError(ErrorType.REQUEST)
    for problem in exc.errors():
        location = ".".join(str(part) for part in problem["loc"])
        errs.add(ERR_PARSE, f"{location}: {problem['msg']}")
    return errs


def build_client_config(settings: Mapping[str, Any]) -> ClientConfig:
    """Validate ``settings`` into a :class:`ClientConfig`, raising :class:`TinesError`."""

    try:
        return ClientConfig.model_validate(dict(settings))
    except ValidationError as exc:
        raise _parse_error(exc) from exc


def load_environment_settings(
    env: Mapping[str, str] | None = None,
    *,
    env_file: Path | None = None,
) -> EnvironmentSettings:
    """Read :class:`EnvironmentSettings`.

    With ``env`` the given mapping is used instead of the process
    environment and no ``.env`` file is consulted.
    """

    try:
        if env is not None:
            return EnvironmentSettings.model_validate(dict(env))
        if env_file is not None:
            return EnvironmentSettings(_env_file=env_file)  # type: ignore[call-arg]
        return EnvironmentSettings()
    except ValidationError as exc:
        raise _parse_error(exc) from exc


def load_config(
    path: str | Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ClientConfig:
    """Build a :class:`ClientConfig` from a YAML file, the environment and overrides.

    Layers are applied in that order; later layers win. Unset (``None``)
    overrides are ignored so CLI options can be passed through directly.
    The YAML file may either hold the fields at the top level or under a
    ``tines`` key.
    """

    payload: dict[str, Any] = {}
    if path is not None:
        payload.update(_load_yaml(Path(path).expanduser()))

    payload.update(load_environment_settings(env).as_overrides())

    if overrides:
        payload.update({key: value for key, value in overrides.items() if value is not None})

    return build_client_config(payload)
