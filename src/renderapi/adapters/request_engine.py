"""Motor de peticiones: una petición (`render_request`) y paginación por cursor.

Reglas:
- Ningún estado se comparte entre llamadas: cada operación usa el cliente
  inyectado o construye uno propio y lo cierra al terminar.
- Los errores no se recuperan aquí: cualquier `RequestError` aborta la
  operación completa y llega al llamador.
- No hay reintentos, caché ni límites de páginas.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from renderapi.adapters.http_client import api_url, build_async_client, build_headers
from renderapi.core.config import AppSettings
from renderapi.core.domain.params import (
    ParamBag,
    ParamMode,
    build_query_string,
    filter_params,
    with_default_limit,
)
from renderapi.core.errors import PageEnvelopeError, RequestError

logger = logging.getLogger(__name__)


async def _send(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    token: str | None,
    headers: dict[str, str],
    payload: dict[str, Any] | None,
) -> Any:
    logger.debug("fetching %s %s", method, url)
    try:
        response = await client.request(method, url, headers=headers, json=payload)
    except httpx.TransportError as exc:
        raise RequestError(
            status_text=f"({exc.__class__.__name__}: {exc})",
            url=url,
            token=token,
        ) from exc

    logger.debug("received %s %s", response.status_code, response.reason_phrase)
    if not response.is_success:
        raise RequestError(
            status_text=response.reason_phrase,
            status_code=response.status_code,
            url=url,
            token=token,
            body=response.text,
        )
    if not response.content:
        return None
    return response.json()


async def render_request(
    token: str | None,
    path: str,
    params: ParamBag | None = None,
    method: str = "GET",
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """Hace una petición a `<base>/<path>` y devuelve el JSON parseado.

    - GET: `params` (con `limit` por defecto) va en la query string.
    - Resto de métodos: `params` filtrado va como cuerpo JSON.

    No valida la forma del JSON; eso es responsabilidad del llamador.
    """

    settings = settings or AppSettings()
    method = method.upper()
    url = api_url(path, settings)
    headers = build_headers(token, settings)

    payload: dict[str, Any] | None = None
    if method == "GET":
        query = build_query_string(with_default_limit(params, settings.default_page_limit))
        if query:
            url = f"{url}?{query}"
    else:
        payload = filter_params(params, ParamMode.JSON)

    if client is not None:
        return await _send(client, method, url, token=token, headers=headers, payload=payload)
    async with build_async_client(settings) as own_client:
        return await _send(own_client, method, url, token=token, headers=headers, payload=payload)


async def render_get(
    token: str | None,
    path: str,
    params: ParamBag | None = None,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> Any:
    return await render_request(token, path, params, "GET", settings=settings, client=client)


async def render_post(
    token: str | None,
    path: str,
    body: ParamBag | None = None,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> Any:
    return await render_request(token, path, body, "POST", settings=settings, client=client)


async def _iter_pages(
    client: httpx.AsyncClient,
    token: str | None,
    path: str,
    params: dict[str, Any],
    settings: AppSettings,
) -> AsyncIterator[list[dict[str, Any]]]:
    page_count = 0
    while True:
        page = await render_request(token, path, params, "GET", settings=settings, client=client)
        if not isinstance(page, list):
            raise PageEnvelopeError(
                status_text="(expected a JSON array page)",
                url=api_url(path, settings),
                token=token,
                body=f"got {type(page).__name__}",
            )
        if not page:
            logger.debug("pagination of %s done after %d page(s)", path, page_count)
            return

        last = page[-1]
        cursor = last.get("cursor") if isinstance(last, dict) else None
        if not cursor:
            raise PageEnvelopeError(
                status_text="(page element without cursor)",
                url=api_url(path, settings),
                token=token,
                body=f"last element: {last!r}"[:500],
            )

        page_count += 1
        yield page
        # https://api-docs.render.com/reference/pagination
        params = {**params, "cursor": cursor}


async def iter_render_pages(
    token: str | None,
    path: str,
    params: ParamBag | None = None,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> AsyncIterator[list[dict[str, Any]]]:
    """Produce las páginas de un endpoint paginado, una a una.

    Cada página es la lista cruda de sobres (`{"cursor": ..., "<recurso>": {...}}`).
    El siguiente `cursor` siempre sale del último elemento de la página actual.
    Termina cuando el servidor devuelve una página vacía; no hay tope de
    páginas, así que un servidor que nunca devuelve `[]` hace que el bucle no
    termine. El generador no es reiniciable.
    """

    settings = settings or AppSettings()
    bag = with_default_limit(params, settings.default_page_limit)

    if client is not None:
        async for page in _iter_pages(client, token, path, bag, settings):
            yield page
        return
    async with build_async_client(settings) as own_client:
        async for page in _iter_pages(own_client, token, path, bag, settings):
            yield page


async def render_get_paged(
    token: str | None,
    path: str,
    params: ParamBag | None = None,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[dict[str, Any]]:
    """Devuelve todos los sobres de todas las páginas de un endpoint paginado.

    Parámetros con valor `None` no se envían: `{"limit": "15", "name": None,
    "id": "bananas"}` se convierte en `?limit=15&id=bananas`.

    O se completa la paginación o la llamada falla entera; no hay resultados
    parciales.
    """

    objects: list[dict[str, Any]] = []
    async for page in iter_render_pages(token, path, params, settings=settings, client=client):
        objects.extend(page)
    return objects
