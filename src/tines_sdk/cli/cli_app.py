"""Typer application exposing read-only SDK operations on the command line."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum
from pathlib import Path
from typing import Any

import typer
from pydantic import BaseModel

from tines_sdk.client import TinesClient
from tines_sdk.config import load_config
from tines_sdk.core.log_events import LogEvents
from tines_sdk.core.logger import LogConfig, LogFormat, UnifiedLogger
from tines_sdk.errors import TinesError
from tines_sdk.filters import ListFilter
from tines_sdk.pagination import PageSequence

__all__ = ["app", "create_app", "run"]


class ListableResource(str, Enum):
    STORIES = "stories"
    CREDENTIALS = "credentials"
    FOLDERS = "folders"
    RESOURCES = "resources"
    AUDIT_LOGS = "audit-logs"


_LISTERS: dict[ListableResource, Callable[[TinesClient, ListFilter], PageSequence[Any]]] = {
    ListableResource.STORIES: TinesClient.list_stories,
    ListableResource.CREDENTIALS: TinesClient.list_credentials,
    ListableResource.FOLDERS: TinesClient.list_folders,
    ListableResource.RESOURCES: TinesClient.list_resources,
    ListableResource.AUDIT_LOGS: TinesClient.list_audit_logs,
}

_CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="YAML file with tenant_url/api_key; TINES_* environment variables override it.",
    exists=True,
    dir_okay=False,
)

_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _validate_log_level(value: str) -> str:
    level = value.upper()
    if level not in _LOG_LEVELS:
        raise typer.BadParameter(f"must be one of {', '.join(_LOG_LEVELS)}")
    return level


_LOG_LEVEL_OPTION = typer.Option(
    "WARNING",
    "--log-level",
    help="Logging level.",
    callback=_validate_log_level,
)


def _echo_models(models: Iterable[BaseModel]) -> int:
    count = 0
    for model in models:
        typer.echo(model.model_dump_json(exclude_none=True))
        count += 1
    return count


def _build_client(config: Path | None) -> TinesClient:
    return TinesClient(load_config(config))


def create_app() -> typer.Typer:
    """Create the Typer application."""

    app = typer.Typer(
        name="tines-sdk",
        help="Command-line access to the Tines API.",
        add_completion=False,
    )

    @app.command(name="list")
    def list_command(
        resource: ListableResource = typer.Argument(..., help="Collection to list."),
        max_results: int = typer.Option(100, "--max-results", min=0, help="0 lists everything."),
        team_id: int | None = typer.Option(None, "--team-id"),
        folder_id: int | None = typer.Option(None, "--folder-id"),
        per_page: int | None = typer.Option(None, "--per-page", help="Clamped to 20-500."),
        config: Path | None = _CONFIG_OPTION,
        log_level: str = _LOG_LEVEL_OPTION,
    ) -> None:
        """Print every item of a collection as one JSON document per line."""

        UnifiedLogger.configure(LogConfig(level=log_level, format=LogFormat.KEY_VALUE))
        log = UnifiedLogger.get(__name__).bind(component="cli")
        list_filter = ListFilter(
            team_id=team_id,
            folder_id=folder_id,
            per_page=per_page,
            max_results=max_results,
        )
        log.info(LogEvents.CLI_RUN_START, command="list", resource=resource.value)
        try:
            with _build_client(config) as client:
                count = _echo_models(_LISTERS[resource](client, list_filter))
        except TinesError as exc:
            log.error(LogEvents.CLI_RUN_ERROR, command="list", error=str(exc))
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=1) from exc
        log.info(LogEvents.CLI_RUN_FINISH, command="list", items=count)

    @app.command(name="info")
    def info_command(
        config: Path | None = _CONFIG_OPTION,
        log_level: str = _LOG_LEVEL_OPTION,
    ) -> None:
        """Print tenant stack information and worker statistics."""

        UnifiedLogger.configure(LogConfig(level=log_level, format=LogFormat.KEY_VALUE))
        log = UnifiedLogger.get(__name__).bind(component="cli")
        log.info(LogEvents.CLI_RUN_START, command="info")
        try:
            with _build_client(config) as client:
                count = _echo_models([client.get_info(), client.get_worker_stats()])
        except TinesError as exc:
            log.error(LogEvents.CLI_RUN_ERROR, command="info", error=str(exc))
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=1) from exc
        log.info(LogEvents.CLI_RUN_FINISH, command="info", items=count)

    return app


app = create_app()


def run() -> None:
    """Console-script entry point."""

    app()


if __name__ == "__main__":
    run()
