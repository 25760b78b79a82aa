"""Persistencia JSON del registro local (`config.json`).

Formato:
    {"projects": {"<name>": {"Repo": ..., "Version": ..., "Origin": ...}}}

Un fallo de lectura no es fatal: se reporta y se continúa con un registro
vacío (toda búsqueda dará "not found").
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from core.domain.errors import ConfigLoadError, ConfigSaveError
from core.domain.models import Registry
from core.services.hooks import PipelineHooks


class JsonRegistryStore:
    """`RegistryStorage` backed by a JSON file on disk."""

    def __init__(self, path: Path, hooks: PipelineHooks | None = None) -> None:
        self.path = path
        self._hooks = hooks or PipelineHooks()

    def load_or_raise(self) -> Registry:
        try:
            raw = self.path.read_text(encoding="utf-8")
            data = json.loads(raw)
            return Registry.model_validate(data)
        except (OSError, ValueError, ValidationError) as exc:
            # JSONDecodeError es subclase de ValueError.
            raise ConfigLoadError(str(exc)) from exc

    def load(self) -> Registry:
        try:
            return self.load_or_raise()
        except ConfigLoadError as exc:
            self._hooks.emit_error(f"Failed to load config file: {exc}")
            self._hooks.emit_warning("Using default empty configuration.")
            return Registry()

    def save_or_raise(self, registry: Registry) -> Path:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(registry.to_document(), ensure_ascii=False, indent=2) + "\n",
                encoding="utf-8",
            )
        except OSError as exc:
            raise ConfigSaveError(str(exc)) from exc
        return self.path

    def save(self, registry: Registry) -> bool:
        try:
            self.save_or_raise(registry)
        except ConfigSaveError as exc:
            self._hooks.emit_error(f"Error updating config file: {exc}")
            return False
        return True
