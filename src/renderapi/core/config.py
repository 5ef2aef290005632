"""Configuración del cliente.

Centraliza variables de entorno (pydantic-settings) para que la CLI y los
adaptadores HTTP lean la misma configuración.

Orden de carga:
- variables de entorno (`RENDERAPI_*`, y `RENDER_API_KEY` para la key)
- `.env` del proyecto
- `.env` global del usuario (ver `get_user_env_file`)
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from renderapi import __version__

DEFAULT_API_BASE_URL = "https://api.render.com/v1"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "renderapi"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "renderapi"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "renderapi"
    return Path.home() / ".config" / "renderapi"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves con valor `None` se ignoran; el resto reemplaza lo existente.
    """

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# renderapi user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del cliente y de la CLI."""

    model_config = SettingsConfigDict(
        env_prefix="RENDERAPI_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        min_length=8,
        description="Origen de la API; todos los paths se añaden a esta URL.",
    )
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("RENDERAPI_API_KEY", "RENDER_API_KEY"),
        description="Token Bearer de la API. Vacío = llamadas anónimas.",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por request (segundos). Sin valor = sin timeout.",
    )
    user_agent: str = Field(
        default=f"renderapi-python/{__version__}",
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )
    default_page_limit: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Valor de `limit` inyectado cuando el llamador no lo indica.",
    )
