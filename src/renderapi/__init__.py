"""Cliente async para la API REST de Render (servicios, env groups, jobs, métricas)."""

__version__ = "3.3.0"

from renderapi.adapters.request_engine import (  # noqa: E402
    iter_render_pages,
    render_get,
    render_get_paged,
    render_post,
    render_request,
)
from renderapi.adapters.resources import (  # noqa: E402
    determine_env_group,
    determine_registry_credential,
    determine_service,
    get_env_group,
    get_env_groups,
    get_env_vars_for_service,
    get_registry_credentials,
    get_service,
    get_services,
    instance_count,
    list_jobs,
)
from renderapi.core.config import AppSettings  # noqa: E402
from renderapi.core.domain.ids import ResourceKind, classify_id  # noqa: E402
from renderapi.core.errors import (  # noqa: E402
    AmbiguousMatchError,
    NotFoundError,
    PageEnvelopeError,
    RenderAPIError,
    RequestError,
)

__all__ = [
    "AmbiguousMatchError",
    "AppSettings",
    "NotFoundError",
    "PageEnvelopeError",
    "RenderAPIError",
    "RequestError",
    "ResourceKind",
    "classify_id",
    "determine_env_group",
    "determine_registry_credential",
    "determine_service",
    "get_env_group",
    "get_env_groups",
    "get_env_vars_for_service",
    "get_registry_credentials",
    "get_service",
    "get_services",
    "instance_count",
    "iter_render_pages",
    "list_jobs",
    "render_get",
    "render_get_paged",
    "render_post",
    "render_request",
]
