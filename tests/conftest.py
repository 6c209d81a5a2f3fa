"""Shared pytest fixtures for the tines_sdk test-suite."""

from __future__ import annotations

import logging
import sys
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

_project_src = Path(__file__).parent.parent / "src"
if str(_project_src) not in sys.path:
    sys.path.insert(0, str(_project_src))

from tines_sdk.client import TinesClient  # noqa: E402
from tines_sdk.config import ClientConfig  # noqa: E402
from tines_sdk.core.logger import UnifiedLogger  # noqa: E402

from tests.support.http import StubSession  # noqa: E402

TENANT_URL = "https://example.tines.com/"
API_KEY = "foo"


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo logging configuration performed by a test (e.g. the CLI)."""

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    UnifiedLogger.reset()
    structlog.reset_defaults()
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(tenant_url=TENANT_URL, api_key=API_KEY)


@pytest.fixture
def session() -> StubSession:
    return StubSession()


@pytest.fixture
def client(client_config: ClientConfig, session: StubSession) -> TinesClient:
    return TinesClient(client_config, session=session)  # type: ignore[arg-type]
