"""Clases de identificador de recurso.

Cada ID de la API lleva un prefijo literal fijo (`srv-`, `evg-`, ...). La
clasificación depende solo del prefijo: un string pertenece a una única
clase o a ninguna.

Todos los prefijos tienen la forma `<tag>-` con tags distintos y de la misma
longitud, así que ningún prefijo es prefijo de otro.
"""

from __future__ import annotations

from enum import Enum

SERVICE_ID_PREFIX = "srv-"
ENVIRONMENT_ID_PREFIX = "evm-"
CRON_ID_PREFIX = "crn-"
JOB_ID_PREFIX = "job-"
# Managed cache y managed database se corrigen por separado si la API cambia.
REDIS_ID_PREFIX = "red-"
POSTGRES_ID_PREFIX = "dpg-"
ENV_GROUP_ID_PREFIX = "evg-"
REGISTRY_CREDENTIAL_ID_PREFIX = "rgc-"


class ResourceKind(str, Enum):
    """Clases de recurso identificables por prefijo."""

    SERVICE = "service"
    ENVIRONMENT = "environment"
    CRON_JOB = "cron_job"
    JOB = "job"
    REDIS = "redis"
    POSTGRES = "postgres"
    ENV_GROUP = "env_group"
    REGISTRY_CREDENTIAL = "registry_credential"

    @property
    def prefix(self) -> str:
        return ID_PREFIXES[self]

    def matches(self, value: str) -> bool:
        return value.startswith(self.prefix)

    def label(self) -> str:
        """Nombre legible en plural, para mensajes de error."""

        return _LABELS[self]


ID_PREFIXES: dict[ResourceKind, str] = {
    ResourceKind.SERVICE: SERVICE_ID_PREFIX,
    ResourceKind.ENVIRONMENT: ENVIRONMENT_ID_PREFIX,
    ResourceKind.CRON_JOB: CRON_ID_PREFIX,
    ResourceKind.JOB: JOB_ID_PREFIX,
    ResourceKind.REDIS: REDIS_ID_PREFIX,
    ResourceKind.POSTGRES: POSTGRES_ID_PREFIX,
    ResourceKind.ENV_GROUP: ENV_GROUP_ID_PREFIX,
    ResourceKind.REGISTRY_CREDENTIAL: REGISTRY_CREDENTIAL_ID_PREFIX,
}

_LABELS: dict[ResourceKind, str] = {
    ResourceKind.SERVICE: "services",
    ResourceKind.ENVIRONMENT: "environments",
    ResourceKind.CRON_JOB: "cron jobs",
    ResourceKind.JOB: "jobs",
    ResourceKind.REDIS: "redis instances",
    ResourceKind.POSTGRES: "postgres databases",
    ResourceKind.ENV_GROUP: "environment groups",
    ResourceKind.REGISTRY_CREDENTIAL: "registry credentials",
}


def classify_id(value: str) -> ResourceKind | None:
    """Devuelve la clase cuyo prefijo lleva `value`, o `None` si no hay ninguna."""

    for kind in ResourceKind:
        if kind.matches(value):
            return kind
    return None


def is_service_id(value: str) -> bool:
    return classify_id(value) is ResourceKind.SERVICE


def is_environment_id(value: str) -> bool:
    return classify_id(value) is ResourceKind.ENVIRONMENT


def is_cron_id(value: str) -> bool:
    return classify_id(value) is ResourceKind.CRON_JOB


def is_job_id(value: str) -> bool:
    return classify_id(value) is ResourceKind.JOB


def is_redis_id(value: str) -> bool:
    return classify_id(value) is ResourceKind.REDIS


def is_postgres_id(value: str) -> bool:
    return classify_id(value) is ResourceKind.POSTGRES


def is_env_group_id(value: str) -> bool:
    return classify_id(value) is ResourceKind.ENV_GROUP


def is_registry_credential_id(value: str) -> bool:
    return classify_id(value) is ResourceKind.REGISTRY_CREDENTIAL
