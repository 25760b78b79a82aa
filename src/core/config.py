"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/registro/instalador) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import ConflictPolicy


DEFAULT_ARCHIVE_URL_TEMPLATE = "https://github.com/ezpkgm/{repo}/archive/refs/tags/{version}.{ext}"
PROJECT_NAMESPACE_URL_TEMPLATE = "https://github.com/{project}/{repo}/archive/refs/tags/{version}.{ext}"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "ezpkgm"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "ezpkgm"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ezpkgm"
    return Path.home() / ".config" / "ezpkgm"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="EZPKGM_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    registry_path: Path = Field(
        default=Path("config.json"),
        description="Local registry JSON document.",
    )
    remote_registry_url: str = Field(
        default="https://raw.githubusercontent.com/ezpkgm/ezpkgm/main/config.json",
        min_length=8,
        description="Canonical remote registry document.",
    )
    user_agent: str = Field(
        default="ezpkgm-package-manager/1.0",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    archive_url_template: str = Field(
        default=DEFAULT_ARCHIVE_URL_TEMPLATE,
        min_length=1,
        description="Archive location; accepts {project}, {repo}, {version} and {ext}.",
    )
    archive_extension: str = Field(
        default="zip",
        min_length=1,
        description="Extension of the downloaded archive.",
    )
    download_dir: Path = Field(
        default=Path("."),
        description="Where the temporary archive is written before extraction.",
    )
    max_redirects: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Maximum number of 301/302 hops followed per download.",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout per request (seconds). None waits indefinitely.",
    )
    sync_enabled: bool = Field(
        default=True,
        description="Reconcile the local registry against the remote one before installing.",
    )
    conflict_policy: ConflictPolicy = Field(
        default=ConflictPolicy.OVERWRITE,
        description="What extraction does with files that already exist (overwrite/skip/fail).",
    )
