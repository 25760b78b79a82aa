"""Reconciliación del registro local contra el remoto.

Semántica (reemplazo binario, no merge):
- Se compara el documento completo (igualdad profunda de valores).
- Si difieren, se pregunta al usuario; solo un "sí" explícito sobrescribe.
- Los proyectos que solo existen en local se pierden al aceptar: por eso se
  avisa antes de preguntar.
- Un fallo de red o de parseo aborta la sync y se sigue con el registro local.
"""

from __future__ import annotations

from typing import Awaitable, Callable

from core.domain.errors import EzpkgmError
from core.domain.models import Registry
from core.interfaces.prompt import ConfirmPrompt
from core.interfaces.registry import RegistryStorage
from core.services.hooks import PipelineHooks

RemoteFetcher = Callable[[], Awaitable[Registry]]

UPDATE_QUESTION = "Do you want to update the config?"


class RegistrySyncEngine:
    def __init__(
        self,
        *,
        store: RegistryStorage,
        fetch_remote: RemoteFetcher,
        confirm: ConfirmPrompt,
        hooks: PipelineHooks | None = None,
    ) -> None:
        self._store = store
        self._fetch_remote = fetch_remote
        self._confirm = confirm
        self._hooks = hooks or PipelineHooks()

    async def reconcile(self, local: Registry) -> Registry:
        """Return the registry to use for the rest of the run."""

        hooks = self._hooks
        hooks.emit_info("Checking for config updates...")

        try:
            remote = await self._fetch_remote()
        except EzpkgmError as exc:
            hooks.emit_error(f"Error checking for config updates: {exc}")
            return local

        if local.same_as(remote):
            hooks.emit_info("Config file is up to date.")
            return local

        diff = local.diff(remote)
        hooks.emit_info(f"Config file update available ({diff.summary()}).")
        if diff.removed:
            lost = ", ".join(sorted(diff.removed))
            hooks.emit_warning(
                f"Updating replaces the whole config; local-only projects will be lost: {lost}"
            )

        if not self._confirm(UPDATE_QUESTION):
            hooks.emit_info("Update of config skipped.")
            return local

        if not self._store.save(remote):
            return local

        hooks.emit_success("Config file updated successfully.")
        return remote
