"""Builder de `httpx.AsyncClient`.

Estandariza timeouts y headers para todas las llamadas a la API. Cada
operación construye su propio cliente (o recibe uno inyectado en tests), así
que no hay pool de conexiones compartido entre llamadas.
"""

from __future__ import annotations

import httpx

from renderapi.core.config import AppSettings


def build_headers(token: str | None, settings: AppSettings | None = None) -> dict[str, str]:
    """Headers de cada petición.

    `Authorization` solo se envía con un token no vacío (llamadas anónimas).
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": settings.user_agent,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def build_async_client(settings: AppSettings | None = None) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults del cliente.

    Sin `http_timeout_seconds` configurado no hay timeout.
    """

    settings = settings or AppSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
    )


def api_url(path: str, settings: AppSettings | None = None) -> str:
    """URL absoluta `<base>/<path>`, sin barras duplicadas."""

    settings = settings or AppSettings()
    return f"{settings.api_base_url.rstrip('/')}/{path.lstrip('/')}"
