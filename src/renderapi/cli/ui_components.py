"""Componentes de UI para la CLI (Rich).

Tablas y paneles reutilizables por los comandos; los comandos no construyen
columnas a mano.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from renderapi.core.domain.models import (
    EnvGroup,
    EnvGroupDetails,
    EnvVar,
    InstanceCount,
    Job,
    RegistryCredential,
    Service,
)


def _enum_text(value: object) -> str:
    if value is None:
        return ""
    return str(getattr(value, "value", value))


def build_services_table(services: Sequence[Service]) -> Table:
    table = Table(title=f"Services ({len(services)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Type", style="magenta")
    table.add_column("Suspended", style="yellow")
    table.add_column("Dashboard", style="dim")
    for service in services:
        table.add_row(
            service.id,
            service.name,
            _enum_text(service.type),
            service.suspended or "",
            service.dashboard_url or "",
        )
    return table


def build_service_panel(service: Service) -> Panel:
    """Panel con el detalle de un servicio."""

    body = Text()
    rows = [
        ("ID", service.id),
        ("Type", _enum_text(service.type)),
        ("Repo", service.repo),
        ("Branch", service.branch),
        ("Root dir", service.root_dir),
        ("Image", service.image_path),
        ("Environment", service.environment_id),
        ("Auto deploy", service.auto_deploy),
        ("Suspended", service.suspended),
        ("Updated", service.updated_at),
        ("Dashboard", service.dashboard_url),
    ]
    for label, value in rows:
        if value:
            body.append(f"{label}: ", style="bold")
            body.append(f"{value}\n")

    details = service.static_site_details()
    if details is not None and details.url:
        body.append("URL: ", style="bold")
        body.append(f"{details.url}\n")

    title = Text(service.name, style="bold cyan")
    return Panel(body, title=title, border_style="cyan")


def build_env_vars_table(env_vars: Sequence[EnvVar], *, show_values: bool = False) -> Table:
    table = Table(title="Environment Variables")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for env_var in env_vars:
        value = env_var.value or ""
        table.add_row(env_var.key, value if show_values else "•" * min(len(value), 12))
    return table


def build_env_groups_table(env_groups: Sequence[EnvGroup]) -> Table:
    table = Table(title=f"Environment Groups ({len(env_groups)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Linked services", style="magenta")
    table.add_column("Updated", style="dim")
    for group in env_groups:
        links = ", ".join(link.name for link in group.service_links)
        table.add_row(group.id, group.name, links, group.updated_at or "")
    return table


def build_env_group_panel(group: EnvGroup, *, show_values: bool = False) -> Panel:
    body = Text()
    body.append("ID: ", style="bold")
    body.append(f"{group.id}\n")
    if group.environment_id:
        body.append("Environment: ", style="bold")
        body.append(f"{group.environment_id}\n")
    if group.service_links:
        body.append("Linked services:\n", style="bold")
        for link in group.service_links:
            body.append(f"- {link.name} ({link.id})\n")
    if isinstance(group, EnvGroupDetails):
        if group.env_vars:
            body.append("Variables:\n", style="bold")
            for env_var in group.env_vars:
                shown = env_var.value if show_values else "*****"
                body.append(f"- {env_var.key}={shown}\n")
        if group.secret_files:
            body.append("Secret files:\n", style="bold")
            for secret in group.secret_files:
                body.append(f"- {secret.name}\n")
    return Panel(body, title=Text(group.name, style="bold green"), border_style="green")


def build_registry_credentials_table(credentials: Sequence[RegistryCredential]) -> Table:
    table = Table(title="Registry Credentials")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Registry", style="magenta")
    table.add_column("Username", style="white")
    for credential in credentials:
        table.add_row(
            credential.id,
            credential.name,
            credential.registry or "",
            credential.username or "",
        )
    return table


def build_jobs_table(jobs: Sequence[Job]) -> Table:
    table = Table(title=f"Jobs ({len(jobs)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Started", style="dim")
    table.add_column("Finished", style="dim")
    table.add_column("Command", style="magenta")
    styles = {"succeeded": "green", "failed": "red", "running": "yellow"}
    for job in jobs:
        status = _enum_text(job.status)
        table.add_row(
            job.id,
            Text(status, style=styles.get(status, "white")),
            job.started_at or "",
            job.finished_at or "",
            job.start_command or "",
        )
    return table


def build_instance_count_table(series: Sequence[InstanceCount]) -> Table:
    table = Table(title="Instance Count")
    table.add_column("Resource", style="cyan", no_wrap=True)
    table.add_column("Timestamp", style="dim")
    table.add_column("Instances", style="white", justify="right")
    for item in series:
        resource = ", ".join(label.value for label in item.labels)
        for point in item.values:
            table.add_row(resource, point.timestamp, f"{point.value:g}")
    return table
