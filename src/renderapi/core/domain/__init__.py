"""Modelos y entidades del dominio.

Estructuras de datos puras: identificadores, bolsa de parámetros y recursos.
El dominio no conoce HTTP ni la CLI.
"""

from renderapi.core.domain.ids import ResourceKind, classify_id
from renderapi.core.domain.models import (
    EnvGroup,
    EnvGroupDetails,
    EnvVar,
    InstanceCount,
    Job,
    RegistryCredential,
    Service,
)
from renderapi.core.domain.params import ParamMode, build_query_string, filter_params, with_default_limit

__all__ = [
    "EnvGroup",
    "EnvGroupDetails",
    "EnvVar",
    "InstanceCount",
    "Job",
    "ParamMode",
    "RegistryCredential",
    "ResourceKind",
    "Service",
    "build_query_string",
    "classify_id",
    "filter_params",
    "with_default_limit",
]
