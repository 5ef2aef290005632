"""Errores del cliente.

Jerarquía:
- `RenderAPIError`: raíz, para capturar cualquier fallo de la librería.
- `RequestError`: respuesta no-2xx o fallo de transporte.
- `PageEnvelopeError`: un endpoint paginado devolvió algo que no es un array
  de sobres con `cursor`.
- `NotFoundError` / `AmbiguousMatchError`: resolución por nombre.

El token nunca aparece en claro en un mensaje: solo su forma redactada.
"""

from __future__ import annotations

from typing import Sequence

_MASK = "*****"
_VISIBLE_TOKEN_CHARS = 6


def redact_token(token: str | None) -> str:
    """Enmascara un token dejando visibles solo los últimos 6 caracteres.

    Tokens de 6 caracteres o menos se enmascaran completos.
    """

    if not token:
        return "<none>"
    if len(token) <= _VISIBLE_TOKEN_CHARS:
        return _MASK
    return _MASK + token[-_VISIBLE_TOKEN_CHARS:]


class RenderAPIError(Exception):
    """Error base de la librería."""


class RequestError(RenderAPIError):
    """Fallo de una petición HTTP (status no-2xx o error de transporte)."""

    def __init__(
        self,
        *,
        status_text: str,
        url: str,
        token: str | None,
        body: str = "",
        status_code: int | None = None,
    ) -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.url = url
        self.redacted_token = redact_token(token)
        self.body = body
        super().__init__(
            f"Unable to fetch data from render {status_text}\n"
            f"url: {url}\n"
            f"api key: {self.redacted_token}\n"
            f"{body}"
        )


class PageEnvelopeError(RequestError):
    """Página con forma inválida: no es una lista, o falta el `cursor`."""


class NotFoundError(RenderAPIError):
    """Ningún recurso coincide con el ID o nombre indicado."""

    def __init__(self, query: str, *, resource: str = "resources") -> None:
        self.query = query
        self.resource = resource
        super().__init__(f"No {resource} found with ID or name {query}")


class AmbiguousMatchError(RenderAPIError):
    """Varios recursos coinciden y ninguno tiene el nombre exacto."""

    def __init__(
        self,
        query: str,
        candidates: Sequence[tuple[str, str]],
        *,
        resource: str = "resources",
    ) -> None:
        self.query = query
        self.resource = resource
        self.candidates = list(candidates)
        listing = "  \n".join(f"{name} ({ident})" for name, ident in self.candidates)
        super().__init__(f"Too many {resource} found with {query}:\n{listing}")
