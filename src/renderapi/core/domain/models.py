"""Modelos de recursos de la API (Pydantic v2).

Describen *qué* devuelve la API, no *cómo* se obtiene. Los campos usan
snake_case en Python y aceptan el camelCase del JSON. Los campos que la API
añada en el futuro se conservan (`extra="allow"`).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class PlanType(str, Enum):
    CUSTOM = "custom"
    FREE = "free"
    PRO_MAX = "pro_max"
    PRO_PLUS = "pro_plus"
    PRO_ULTRA = "pro_ultra"
    PRO = "pro"
    STANDARD_PLUS = "standard_plus"
    STANDARD = "standard"
    STARTER_PLUS = "starter_plus"
    STARTER = "starter"


class ServiceType(str, Enum):
    BACKGROUND_WORKER = "background_worker"
    CRON_JOB = "cron_job"
    PRIVATE_SERVICE = "private_service"
    STATIC_SITE = "static_site"
    WEB_SERVICE = "web_service"


class JobStatus(str, Enum):
    FAILED = "failed"
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"


class RenderModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class NamedRef(RenderModel):
    id: str
    name: str


class BuildFilter(RenderModel):
    ignored_paths: list[str] = Field(default_factory=list)
    paths: list[str] = Field(default_factory=list)


class StaticSiteDetails(RenderModel):
    build_command: str | None = None
    build_plan: PlanType | str | None = None
    parent_server: NamedRef | None = None
    previews: dict[str, Any] | None = None
    publish_path: str | None = None
    url: str | None = None


class Service(RenderModel):
    """Servicio (web, worker, cron, static site, private service)."""

    id: str = Field(..., min_length=1, description="ID con prefijo `srv-` (o `crn-`).")
    name: str = Field(..., description="Nombre visible del servicio.")
    type: ServiceType | str | None = None
    auto_deploy: str | None = None
    branch: str | None = None
    build_filter: BuildFilter | None = None
    created_at: str | None = None
    updated_at: str | None = None
    dashboard_url: str | None = None
    environment_id: str | None = None
    image_path: str | None = None
    notify_on_fail: str | None = None
    owner_id: str | None = None
    registry_credential: NamedRef | None = None
    repo: str | None = None
    root_dir: str | None = None
    # La forma depende de `type`; solo static site está modelado.
    service_details: dict[str, Any] | None = None
    slug: str | None = None
    suspended: str | None = None
    suspenders: list[str] = Field(default_factory=list)

    def static_site_details(self) -> StaticSiteDetails | None:
        if self.type != ServiceType.STATIC_SITE or self.service_details is None:
            return None
        return StaticSiteDetails.model_validate(self.service_details)


class EnvVar(RenderModel):
    key: str
    value: str | None = None


class SecretFile(RenderModel):
    name: str
    content: str | None = None


class ServiceLink(RenderModel):
    id: str
    name: str
    type: ServiceType | str | None = None


class EnvGroup(RenderModel):
    id: str = Field(..., min_length=1, description="ID con prefijo `evg-`.")
    name: str
    environment_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("environmentId", "environmentID", "environment_id"),
    )
    owner_id: str | None = None
    service_links: list[ServiceLink] = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None


class EnvGroupDetails(EnvGroup):
    """Env group con sus variables y secret files."""

    env_vars: list[EnvVar] = Field(default_factory=list)
    secret_files: list[SecretFile] = Field(default_factory=list)


class RegistryCredential(RenderModel):
    id: str = Field(..., min_length=1, description="ID con prefijo `rgc-`.")
    name: str
    registry: str | None = None
    username: str | None = None
    updated_at: str | None = None


class Job(RenderModel):
    id: str
    service_id: str | None = None
    plan_id: str | None = None
    start_command: str | None = None
    status: JobStatus | str | None = None
    created_at: str | None = None
    started_at: str | None = None
    finished_at: str | None = None


class MetricLabel(RenderModel):
    field: str | None = None
    value: str


class MetricPoint(RenderModel):
    timestamp: str
    value: float


class InstanceCount(RenderModel):
    labels: list[MetricLabel] = Field(default_factory=list)
    values: list[MetricPoint] = Field(default_factory=list)
