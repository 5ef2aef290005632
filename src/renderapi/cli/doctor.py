"""Doctor command for environment diagnostics and API key setup."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from renderapi.adapters.request_engine import render_get
from renderapi.core.config import AppSettings, get_user_env_file, write_user_env_vars
from renderapi.core.errors import RenderAPIError, redact_token

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    """Authenticated one-item request against the services listing."""

    try:
        page = await render_get(settings.api_key or "", "services", {"limit": "1"}, settings=settings)
    except RenderAPIError as exc:
        first_line = str(exc).splitlines()[0]
        return False, first_line
    count = len(page) if isinstance(page, list) else 0
    return True, f"OK ({count} item(s) on first page)"


def _settings_from(ctx: typer.Context) -> AppSettings:
    parent = ctx.find_root().obj
    settings = getattr(parent, "settings", None)
    return settings if isinstance(settings, AppSettings) else AppSettings()


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = _settings_from(ctx)

    table = Table(title="renderapi Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.api_key:
        table.add_row("API key", "OK", redact_token(settings.api_key))
    else:
        table.add_row("API key", "MISSING", "Set RENDER_API_KEY or run `renderapi doctor setup`")
    table.add_row("API base URL", "OK", settings.api_base_url)
    timeout = "none" if settings.http_timeout_seconds is None else f"{settings.http_timeout_seconds:g}s"
    table.add_row("HTTP timeout", "OK", timeout)
    table.add_row("User config", "OK" if get_user_env_file().exists() else "ABSENT", str(get_user_env_file()))

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api and not settings.api_key:
        _console.print("\n[yellow]Note:[/yellow] most endpoints require an API key.")


@app.command()
def setup(
    base_url: str = typer.Option(
        "",
        "--base-url",
        help="Override the API origin (leave empty to keep the default).",
    ),
) -> None:
    """Interactive setup (stores the API key in the user config .env)."""

    api_key = typer.prompt("Render API key", hide_input=True, confirmation_prompt=False).strip()
    if not api_key:
        raise typer.BadParameter("an API key is required")

    env_path = write_user_env_vars(
        {
            "RENDERAPI_API_KEY": api_key,
            "RENDERAPI_API_BASE_URL": base_url.strip() or None,
        }
    )

    _console.print(f"[green]Saved API key {redact_token(api_key)} to:[/green] {env_path}")
