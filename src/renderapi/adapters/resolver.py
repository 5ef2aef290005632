"""Resolución de "ID o nombre" a un único recurso.

Estrategia:
1. Si el input lleva el prefijo de ID de la clase, se hace fetch directo.
   Un ID inexistente falla con el `RequestError` del fetch.
2. Si no, se listan *todos* los recursos y se filtran por nombre en cliente
   (búsqueda por patrón, no igualdad; el filtro `name` de la API solo admite
   match exacto).
   - 0 coincidencias -> `NotFoundError`
   - 1 coincidencia -> ese recurso
   - varias -> gana el que tenga el nombre exactamente igual al input
     (p.ej. "foo-prod" frente a "foo-prod-staging"); si no hay, se lanza
     `AmbiguousMatchError` con todos los candidatos.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Protocol, TypeVar

from renderapi.core.domain.ids import ResourceKind
from renderapi.core.errors import AmbiguousMatchError, NotFoundError

logger = logging.getLogger(__name__)


class NamedResource(Protocol):
    id: str
    name: str


R = TypeVar("R", bound=NamedResource)


def name_matches(pattern: str, name: str) -> bool:
    """Búsqueda por patrón (regex) en cualquier posición del nombre.

    Un patrón que no compila como regex se busca como texto literal.
    """

    try:
        return re.search(pattern, name) is not None
    except re.error:
        return pattern in name


def filter_by_name(resources: Iterable[R], pattern: str) -> list[R]:
    """Filtra por nombre; un patrón vacío no filtra nada."""

    if pattern == "":
        return list(resources)
    return [r for r in resources if name_matches(pattern, r.name)]


def pick_match(query: str, matches: Sequence[R], *, kind: ResourceKind) -> R:
    """Aplica las reglas de desempate sobre las coincidencias por nombre."""

    if not matches:
        raise NotFoundError(query, resource=kind.label())
    if len(matches) == 1:
        return matches[0]

    for candidate in matches:
        if candidate.name == query:
            logger.debug("%d %s match %r, exact name wins", len(matches), kind.label(), query)
            return candidate

    raise AmbiguousMatchError(
        query,
        [(m.name, m.id) for m in matches],
        resource=kind.label(),
    )


async def resolve_resource(
    id_or_name: str,
    *,
    kind: ResourceKind,
    fetch_by_id: Callable[[str], Awaitable[R]],
    list_by_name: Callable[[str], Awaitable[Sequence[R]]],
) -> R:
    """Resuelve `id_or_name` a un recurso de clase `kind`.

    `fetch_by_id` recibe el ID tal cual; `list_by_name` recibe el patrón y
    devuelve los recursos cuyo nombre coincide.
    """

    if kind.matches(id_or_name):
        logger.debug("resolving %r as %s id", id_or_name, kind.value)
        return await fetch_by_id(id_or_name)

    logger.debug("resolving %r by name among %s", id_or_name, kind.label())
    matches = await list_by_name(id_or_name)
    return pick_match(id_or_name, matches, kind=kind)
