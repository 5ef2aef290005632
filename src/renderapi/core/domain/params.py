"""Filtro de parámetros (bolsa de parámetros -> query string / cuerpo JSON).

Forma aceptada de cada valor:
- ausente (`None`): la clave se omite
- secuencia vacía: la clave se omite
- escalar (`str`, `int`, `float`, `bool`): se pasa tal cual
- secuencia no vacía de strings: en query string se une con comas en una sola
  ocurrencia (`resource=a,b,c`), en JSON se mantiene como array

El filtro es funcional: nunca modifica la bolsa del llamador.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Union
from urllib.parse import urlencode

Scalar = Union[str, int, float, bool]
ParamValue = Union[Scalar, Sequence[str], None]
ParamBag = Mapping[str, ParamValue]

DEFAULT_LIMIT = 100


class ParamMode(str, Enum):
    """Modo de transporte de los parámetros."""

    # Un valor por clave (query string): las listas se unen con comas.
    QUERY = "query"
    # Admite listas (cuerpo JSON): las listas se mantienen.
    JSON = "json"


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _is_absent(value: object) -> bool:
    if value is None:
        return True
    return _is_sequence(value) and len(value) == 0  # type: ignore[arg-type]


def _query_scalar(value: Scalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def with_default_limit(params: ParamBag | None, limit: int = DEFAULT_LIMIT) -> dict[str, ParamValue]:
    """Copia de `params` con `limit` fijado si falta o está vacío."""

    bag: dict[str, ParamValue] = dict(params or {})
    current = bag.get("limit")
    if current is None or current == "" or (_is_sequence(current) and not current):
        bag["limit"] = str(limit)
    return bag


def filter_params(params: ParamBag | None, mode: ParamMode = ParamMode.QUERY) -> dict[str, Any]:
    """Devuelve solo las claves con valor presente, serializadas según `mode`.

    El contrato es permisivo: tipos mezclados se aceptan (cada elemento de una
    secuencia se convierte a string antes de unirlo).
    """

    out: dict[str, Any] = {}
    for key, value in (params or {}).items():
        if _is_absent(value):
            continue
        if mode is ParamMode.JSON:
            out[key] = list(value) if _is_sequence(value) else value  # type: ignore[arg-type]
        elif _is_sequence(value):
            out[key] = ",".join(_query_scalar(v) for v in value)  # type: ignore[union-attr]
        else:
            out[key] = _query_scalar(value)  # type: ignore[arg-type]
    return out


def build_query_string(params: ParamBag | None) -> str:
    """Query string codificada (sin `?`); las comas se codifican como `%2C`."""

    return urlencode(filter_params(params, ParamMode.QUERY))
