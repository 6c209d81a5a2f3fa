"""Tests for client configuration validation and loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from tines_sdk.config import (
    ClientConfig,
    default_user_agent,
    load_config,
    load_environment_settings,
    validate_client_config,
)
from tines_sdk.errors import (
    ERR_EMPTY_API_KEY,
    ERR_EMPTY_TENANT,
    ERR_MALFORMED_TENANT,
    ERR_PARSE,
    ErrorMessage,
    ErrorType,
    TinesError,
)


@pytest.mark.unit
class TestValidateClientConfig:
    def test_valid_config_passes(self) -> None:
        validate_client_config(ClientConfig(tenant_url="https://example.tines.com/", api_key="foo"))

    def test_every_problem_is_reported_together(self) -> None:
        with pytest.raises(TinesError) as excinfo:
            validate_client_config(ClientConfig())

        error = excinfo.value
        assert error.type is ErrorType.REQUEST
        assert error.errors == [
            ErrorMessage(message="host error", details=ERR_EMPTY_TENANT),
            ErrorMessage(message="credential error", details=ERR_EMPTY_API_KEY),
            ErrorMessage(message="host error", details=ERR_MALFORMED_TENANT),
        ]

    def test_plain_http_tenant_is_rejected(self) -> None:
        with pytest.raises(TinesError) as excinfo:
            validate_client_config(ClientConfig(tenant_url="http://example.tines.com", api_key="foo"))

        assert excinfo.value.errors == [ErrorMessage(message="host error", details=ERR_MALFORMED_TENANT)]


@pytest.mark.unit
class TestClientConfig:
    def test_user_agent_defaults_to_sdk_value(self) -> None:
        config = ClientConfig()

        assert config.effective_user_agent == default_user_agent()
        assert config.effective_user_agent.startswith("TinesPythonSdk/")

    def test_custom_user_agent_wins(self) -> None:
        assert ClientConfig(user_agent="my-agent").effective_user_agent == "my-agent"

    def test_timeout_tuple(self) -> None:
        config = ClientConfig(timeout_sec=5, connect_timeout_sec=15)

        assert config.timeout == (5, 5)
        assert ClientConfig().timeout == (15, 60)

    def test_api_key_is_hidden_from_repr(self) -> None:
        assert "secret" not in repr(ClientConfig(api_key="secret"))

    def test_with_options_returns_new_instance(self) -> None:
        base = ClientConfig(tenant_url="https://a.tines.com/")

        updated = base.with_options(api_key="k")

        assert updated.api_key == "k"
        assert updated.tenant_url == "https://a.tines.com/"
        assert base.api_key == ""


@pytest.mark.unit
class TestLoadConfig:
    def test_yaml_then_env_then_overrides(self, tmp_path: Path) -> None:
        path = tmp_path / "tines.yaml"
        path.write_text(
            "tines:\n"
            "  tenant_url: https://file.tines.com/\n"
            "  api_key: from-file\n"
            "  timeout_sec: 30\n",
            encoding="utf-8",
        )

        config = load_config(
            path,
            env={"TINES_API_KEY": "from-env", "TINES_USER_AGENT": "agent/1"},
            overrides={"timeout_sec": 10, "user_agent": None},
        )

        assert config.tenant_url == "https://file.tines.com/"
        assert config.api_key == "from-env"
        assert config.user_agent == "agent/1"
        assert config.timeout_sec == 10

    def test_top_level_yaml_without_section(self, tmp_path: Path) -> None:
        path = tmp_path / "tines.yaml"
        path.write_text("tenant_url: https://flat.tines.com/\napi_key: k\n", encoding="utf-8")

        config = load_config(path, env={})

        assert config.tenant_url == "https://flat.tines.com/"

    def test_environment_only(self) -> None:
        config = load_config(
            env={
                "TINES_TENANT_URL": "https://env.tines.com/",
                "TINES_API_KEY": "k",
                "TINES_TIMEOUT_SEC": "2.5",
            }
        )

        assert config.tenant_url == "https://env.tines.com/"
        assert config.timeout_sec == 2.5

    def test_empty_environment_values_are_ignored(self) -> None:
        assert load_config(env={"TINES_API_KEY": ""}).api_key == ""

    def test_invalid_values_become_parse_errors(self) -> None:
        with pytest.raises(TinesError) as excinfo:
            load_config(env={"TINES_TIMEOUT_SEC": "soon"})

        assert [err.message for err in excinfo.value.errors] == [ERR_PARSE]
        assert excinfo.value.errors[0].details.startswith("TINES_TIMEOUT_SEC:")

    def test_non_mapping_yaml_is_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "tines.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")

        with pytest.raises(TinesError, match="must contain a mapping"):
            load_config(path, env={})

    def test_invalid_file_values_name_the_field(self, tmp_path: Path) -> None:
        path = tmp_path / "tines.yaml"
        path.write_text("timeout_sec: -1\n", encoding="utf-8")

        with pytest.raises(TinesError) as excinfo:
            load_config(path, env={})

        assert excinfo.value.errors[0].details.startswith("timeout_sec:")


@pytest.mark.unit
def test_environment_settings_keep_api_key_secret() -> None:
    settings = load_environment_settings({"TINES_API_KEY": "s3cret", "UNRELATED": "x"})

    assert "s3cret" not in repr(settings)
    assert settings.as_overrides() == {"api_key": "s3cret"}
