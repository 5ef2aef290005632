"""CLI `renderapi` (Typer + Rich).

Los comandos solo resuelven argumentos, llaman a `renderapi.adapters` y
pintan el resultado; la lógica de peticiones y resolución vive fuera.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, TypeVar

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler

from renderapi.adapters import resources
from renderapi.cli import doctor
from renderapi.cli.ui_components import (
    build_env_group_panel,
    build_env_groups_table,
    build_env_vars_table,
    build_instance_count_table,
    build_jobs_table,
    build_registry_credentials_table,
    build_service_panel,
    build_services_table,
)
from renderapi.core.config import AppSettings
from renderapi.core.domain.ids import ResourceKind, classify_id
from renderapi.core.errors import RenderAPIError

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Command line client for the Render REST API.")
services_app = typer.Typer(no_args_is_help=True, help="Services, their env vars and jobs.")
env_groups_app = typer.Typer(no_args_is_help=True, help="Environment groups.")
registry_app = typer.Typer(no_args_is_help=True, help="Registry credentials.")
metrics_app = typer.Typer(no_args_is_help=True, help="Service metrics.")

app.add_typer(services_app, name="services")
app.add_typer(env_groups_app, name="env-groups")
app.add_typer(registry_app, name="registry-credentials")
app.add_typer(metrics_app, name="metrics")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@dataclass
class CliState:
    settings: AppSettings

    @property
    def token(self) -> str:
        return self.settings.api_key or ""


def _state(ctx: typer.Context) -> CliState:
    if isinstance(ctx.obj, CliState):
        return ctx.obj
    return CliState(settings=AppSettings())


def _run(coro: Awaitable[T]) -> T:
    """Ejecuta una corrutina y convierte errores de la librería en exit 1."""

    try:
        return asyncio.run(coro)  # type: ignore[arg-type]
    except RenderAPIError as exc:
        _err_console.print(str(exc), style="red", markup=False, highlight=False)
        raise typer.Exit(code=1) from exc


def _print_json(items: BaseModel | Sequence[BaseModel]) -> None:
    data: Any
    if isinstance(items, BaseModel):
        data = items.model_dump(mode="json", by_alias=True)
    else:
        data = [item.model_dump(mode="json", by_alias=True) for item in items]
    _console.print_json(data=data)


def parse_epoch(value: str | None) -> int | None:
    """Acepta epoch (segundos) o ISO-8601; las fechas sin zona se toman en UTC."""

    if value is None or value == "":
        return None
    if value.isdigit():
        return int(value)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"invalid time {value!r}: use epoch seconds or ISO-8601") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


@app.callback()
def main(
    ctx: typer.Context,
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        help="API token (defaults to RENDER_API_KEY / RENDERAPI_API_KEY).",
        show_default=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every HTTP request."),
) -> None:
    settings = AppSettings()
    if api_key is not None:
        settings = settings.model_copy(update={"api_key": api_key})
    ctx.obj = CliState(settings=settings)
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=_err_console, show_path=False)],
        )
        # httpx/httpcore loguean headers a nivel DEBUG.
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


@services_app.command("list")
def services_list(
    ctx: typer.Context,
    name: str = typer.Option("", "--name", "-n", help="Regex matched against service names."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """List all services, optionally filtered by name."""

    state = _state(ctx)
    services = _run(resources.get_services(state.token, name, settings=state.settings))
    if as_json:
        _print_json(services)
        return
    _console.print(build_services_table(services))


@services_app.command("show")
def services_show(
    ctx: typer.Context,
    service: str = typer.Argument(..., help="Service ID (srv-...) or name."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """Show a single service."""

    state = _state(ctx)
    found = _run(resources.determine_service(state.token, service, settings=state.settings))
    if as_json:
        _print_json(found)
        return
    _console.print(build_service_panel(found))


@services_app.command("env-vars")
def services_env_vars(
    ctx: typer.Context,
    service: str = typer.Argument(..., help="Service ID (srv-...) or name."),
    show_values: bool = typer.Option(False, "--show-values", help="Print values in clear text."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """List env vars set directly on a service (not from linked env groups)."""

    state = _state(ctx)

    async def fetch() -> list:
        found = await resources.determine_service(state.token, service, settings=state.settings)
        return await resources.get_env_vars_for_service(state.token, found.id, settings=state.settings)

    env_vars = _run(fetch())
    if as_json:
        _print_json(env_vars)
        return
    _console.print(build_env_vars_table(env_vars, show_values=show_values))


@services_app.command("jobs")
def services_jobs(
    ctx: typer.Context,
    service: str = typer.Argument(..., help="Service or cron job ID, or service name."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """List the jobs of a service or cron job."""

    state = _state(ctx)

    async def fetch() -> list:
        item_id = service
        if classify_id(item_id) not in (ResourceKind.SERVICE, ResourceKind.CRON_JOB):
            found = await resources.determine_service(state.token, service, settings=state.settings)
            item_id = found.id
        return await resources.list_jobs(state.token, item_id, settings=state.settings)

    jobs = _run(fetch())
    if as_json:
        _print_json(jobs)
        return
    _console.print(build_jobs_table(jobs))


@env_groups_app.command("list")
def env_groups_list(
    ctx: typer.Context,
    name: str = typer.Option("", "--name", "-n", help="Regex matched against group names."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """List environment groups."""

    state = _state(ctx)
    groups = _run(resources.get_env_groups(state.token, name, settings=state.settings))
    if as_json:
        _print_json(groups)
        return
    _console.print(build_env_groups_table(groups))


@env_groups_app.command("show")
def env_groups_show(
    ctx: typer.Context,
    env_group: str = typer.Argument(..., help="Env group ID (evg-...) or name."),
    show_values: bool = typer.Option(False, "--show-values", help="Print values in clear text."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """Show an environment group with its variables and secret files."""

    state = _state(ctx)

    async def fetch() -> Any:
        found = await resources.determine_env_group(state.token, env_group, settings=state.settings)
        # Por nombre llega el resumen del listado; el detalle trae las variables.
        return await resources.get_env_group(state.token, found.id, settings=state.settings)

    group = _run(fetch())
    if as_json:
        _print_json(group)
        return
    _console.print(build_env_group_panel(group, show_values=show_values))


@registry_app.command("list")
def registry_credentials_list(
    ctx: typer.Context,
    name: str = typer.Option("", "--name", "-n", help="Regex matched against credential names."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """List registry credentials."""

    state = _state(ctx)
    credentials = _run(resources.get_registry_credentials(state.token, name, settings=state.settings))
    if as_json:
        _print_json(credentials)
        return
    _console.print(build_registry_credentials_table(credentials))


@metrics_app.command("instance-count")
def metrics_instance_count(
    ctx: typer.Context,
    resource_ids: list[str] = typer.Argument(..., help="Service, Postgres or Redis IDs."),
    start: str | None = typer.Option(None, "--start", help="Start time (epoch or ISO-8601)."),
    end: str | None = typer.Option(None, "--end", help="End time (epoch or ISO-8601)."),
    resolution: int | None = typer.Option(None, "--resolution", min=30, help="Resolution in seconds."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """Instance count over time for one or more resources."""

    state = _state(ctx)
    series = _run(
        resources.instance_count(
            state.token,
            resource_ids,
            start_time=parse_epoch(start),
            end_time=parse_epoch(end),
            resolution_seconds=resolution,
            settings=state.settings,
        )
    )
    if as_json:
        _print_json(series)
        return
    _console.print(build_instance_count_table(series))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
