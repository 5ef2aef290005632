"""Endpoints de la API sobre el motor de peticiones.

Cada función es una aplicación directa de `render_get` / `render_get_paged`
más el parseo al modelo del dominio. Los endpoints paginados devuelven
sobres `{"cursor": ..., "<clave>": {...}}`; aquí se desenvuelven.

Referencia: https://api-docs.render.com/reference
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from renderapi.adapters.request_engine import render_get, render_get_paged
from renderapi.adapters.resolver import filter_by_name, resolve_resource
from renderapi.core.config import AppSettings
from renderapi.core.domain.ids import ResourceKind
from renderapi.core.domain.models import (
    EnvGroup,
    EnvGroupDetails,
    EnvVar,
    InstanceCount,
    Job,
    RegistryCredential,
    Service,
)

M = TypeVar("M", bound=BaseModel)


def unwrap(envelopes: Sequence[dict[str, Any]], key: str, model: type[M]) -> list[M]:
    """Extrae `envelope[key]` de cada sobre y lo valida contra `model`."""

    return [model.model_validate(envelope[key]) for envelope in envelopes]


async def get_service(
    token: str | None,
    service_id: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> Service:
    """https://api-docs.render.com/reference/retrieve-service"""

    data = await render_get(token, f"services/{service_id}", settings=settings, client=client)
    return Service.model_validate(data)


async def get_services(
    token: str | None,
    name_filter: str = "",
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[Service]:
    """Lista todos los servicios, filtrados por nombre si `name_filter` no está vacío.

    No usa el parámetro `name` de la API porque ese filtro solo admite match
    exacto.

    https://api-docs.render.com/reference/list-services
    """

    envelopes = await render_get_paged(token, "services", settings=settings, client=client)
    return filter_by_name(unwrap(envelopes, "service", Service), name_filter)


async def determine_service(
    token: str | None,
    service_id_or_name: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> Service:
    """Resuelve un ID de servicio o un nombre (patrón) a un único `Service`."""

    async def fetch(service_id: str) -> Service:
        return await get_service(token, service_id, settings=settings, client=client)

    async def search(pattern: str) -> list[Service]:
        return await get_services(token, pattern, settings=settings, client=client)

    return await resolve_resource(
        service_id_or_name,
        kind=ResourceKind.SERVICE,
        fetch_by_id=fetch,
        list_by_name=search,
    )


async def get_env_vars_for_service(
    token: str | None,
    service_id: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[EnvVar]:
    """Variables definidas *directamente* en el servicio.

    No incluye las variables de los env groups enlazados.
    """

    envelopes = await render_get_paged(
        token, f"services/{service_id}/env-vars", settings=settings, client=client
    )
    return unwrap(envelopes, "envVar", EnvVar)


async def get_env_groups(
    token: str | None,
    name_filter: str = "",
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[EnvGroup]:
    """https://api-docs.render.com/reference/list-env-groups"""

    envelopes = await render_get_paged(token, "env-groups", settings=settings, client=client)
    return filter_by_name(unwrap(envelopes, "envGroup", EnvGroup), name_filter)


async def get_env_group(
    token: str | None,
    env_group_id: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> EnvGroupDetails:
    """https://api-docs.render.com/reference/retrieve-env-group"""

    data = await render_get(token, f"env-groups/{env_group_id}", settings=settings, client=client)
    return EnvGroupDetails.model_validate(data)


async def determine_env_group(
    token: str | None,
    env_group_id_or_name: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> EnvGroup:
    """Resuelve un ID (`evg-`) o nombre de env group.

    Por ID devuelve `EnvGroupDetails`; por nombre, el `EnvGroup` del listado.
    """

    async def fetch(env_group_id: str) -> EnvGroup:
        return await get_env_group(token, env_group_id, settings=settings, client=client)

    async def search(pattern: str) -> list[EnvGroup]:
        return await get_env_groups(token, pattern, settings=settings, client=client)

    return await resolve_resource(
        env_group_id_or_name,
        kind=ResourceKind.ENV_GROUP,
        fetch_by_id=fetch,
        list_by_name=search,
    )


async def get_registry_credentials(
    token: str | None,
    name_filter: str = "",
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[RegistryCredential]:
    """Credenciales de registry visibles para el usuario.

    La documentación lo presenta como paginado, pero la respuesta es un array
    plano sin sobres de cursor, así que se pide con un único GET.

    https://api-docs.render.com/reference/list-registry-credentials
    """

    data = await render_get(token, "registrycredentials", settings=settings, client=client)
    credentials = [RegistryCredential.model_validate(item) for item in data or []]
    return filter_by_name(credentials, name_filter)


async def determine_registry_credential(
    token: str | None,
    credential_id_or_name: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> RegistryCredential:
    async def fetch(credential_id: str) -> RegistryCredential:
        data = await render_get(
            token, f"registrycredentials/{credential_id}", settings=settings, client=client
        )
        return RegistryCredential.model_validate(data)

    async def search(pattern: str) -> list[RegistryCredential]:
        return await get_registry_credentials(token, pattern, settings=settings, client=client)

    return await resolve_resource(
        credential_id_or_name,
        kind=ResourceKind.REGISTRY_CREDENTIAL,
        fetch_by_id=fetch,
        list_by_name=search,
    )


async def list_jobs(
    token: str | None,
    item_id: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[Job]:
    """Jobs de un servicio o cron job (`srv-` / `crn-`).

    https://api-docs.render.com/reference/list-job
    """

    envelopes = await render_get_paged(token, f"services/{item_id}/jobs", settings=settings, client=client)
    return unwrap(envelopes, "job", Job)


async def instance_count(
    token: str | None,
    resources: Sequence[str],
    start_time: int | None = None,
    end_time: int | None = None,
    resolution_seconds: int | None = None,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[InstanceCount]:
    """Métrica de número de instancias.

    Args:
        resources: IDs de servicio, Postgres o Redis.
        start_time: epoch de inicio; por defecto la API usa ahora - 1h.
        end_time: epoch de fin; por defecto ahora.
        resolution_seconds: resolución (>= 30); por defecto 60.

    https://api-docs.render.com/reference/get-instance-count
    """

    data = await render_get(
        token,
        "metrics/instance-count",
        {
            "endTime": end_time,
            "resolutionSeconds": resolution_seconds,
            "resource": list(resources),
            "startTime": start_time,
        },
        settings=settings,
        client=client,
    )
    return [InstanceCount.model_validate(item) for item in data or []]
