"""Install orchestration.

This module consolidates the whole install flow (load -> sync -> fetch ->
extract -> cleanup) behind one parameterized entry-point. The CLI delegates
to `install_project` and only decides how to render the hooks, which keeps
side-effects (printing, prompting) out of the core logic.

Every phase contains its own failures: they are reported through the hooks
and turned into a `PipelineResult` status, never into a crash. A failed fetch
simply prevents the dependent install step from running.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from pathlib import Path

from adapters.archive_fetcher import ArchiveFetcher
from adapters.archive_installer import ArchiveInstaller
from adapters.http_client import ClientFactory
from adapters.registry_remote import fetch_remote_registry
from adapters.registry_store import JsonRegistryStore
from core.config import AppSettings
from core.domain.errors import EzpkgmError, ProjectNotFoundError
from core.domain.models import Registry
from core.interfaces.prompt import ConfirmPrompt
from core.interfaces.registry import RegistryStorage
from core.services.hooks import PipelineHooks
from core.services.registry_sync import RegistrySyncEngine

USAGE_MESSAGE = "Please provide a project name to install."


class InstallStatus(str, Enum):
    INSTALLED = "installed"
    NO_PROJECT = "no_project"
    NOT_FOUND = "not_found"
    FETCH_FAILED = "fetch_failed"
    INSTALL_FAILED = "install_failed"


@dataclass
class InstallRequest:
    """Parameters that control one pipeline run."""

    project_name: str | None = None
    sync: bool = True


@dataclass
class PipelineResult:
    """Output of a pipeline invocation."""

    status: InstallStatus
    registry: Registry
    archive_path: Path | None = None
    destination: Path | None = None
    extracted: list[Path] = field(default_factory=list)
    error: EzpkgmError | None = None

    @property
    def ok(self) -> bool:
        return self.status in (InstallStatus.INSTALLED, InstallStatus.NO_PROJECT)


@dataclass
class Pipeline:
    """The wired components for one run."""

    store: RegistryStorage
    sync_engine: RegistrySyncEngine
    fetcher: ArchiveFetcher
    installer: ArchiveInstaller
    hooks: PipelineHooks


def build_pipeline(
    settings: AppSettings,
    *,
    confirm: ConfirmPrompt,
    hooks: PipelineHooks | None = None,
    client_factory: ClientFactory | None = None,
) -> Pipeline:
    """Wire the default components (JSON store, HTTPS remote, zip installer)."""

    hooks = hooks or PipelineHooks()
    store = JsonRegistryStore(settings.registry_path, hooks)
    sync_engine = RegistrySyncEngine(
        store=store,
        fetch_remote=partial(fetch_remote_registry, settings, client_factory=client_factory),
        confirm=confirm,
        hooks=hooks,
    )
    return Pipeline(
        store=store,
        sync_engine=sync_engine,
        fetcher=ArchiveFetcher(settings, hooks, client_factory=client_factory),
        installer=ArchiveInstaller(hooks, conflict_policy=settings.conflict_policy),
        hooks=hooks,
    )


async def resolve_registry(request: InstallRequest, pipeline: Pipeline) -> Registry:
    """Load the local registry and, if requested, reconcile it with the remote one."""

    registry = pipeline.store.load()
    if request.sync:
        registry = await pipeline.sync_engine.reconcile(registry)
    return registry


async def install_project(request: InstallRequest, pipeline: Pipeline) -> PipelineResult:
    hooks = pipeline.hooks

    registry = await resolve_registry(request, pipeline)

    if not request.project_name:
        hooks.emit_info(USAGE_MESSAGE)
        return PipelineResult(status=InstallStatus.NO_PROJECT, registry=registry)

    project_name = request.project_name
    try:
        record = registry.get_project(project_name)
    except ProjectNotFoundError as exc:
        hooks.emit_warning(str(exc))
        return PipelineResult(status=InstallStatus.NOT_FOUND, registry=registry, error=exc)

    destination = Path(record.origin)
    try:
        archive_path = await pipeline.fetcher.fetch(project_name, registry)
    except EzpkgmError as exc:
        hooks.emit_error(f"Failed to download project: {exc}")
        return PipelineResult(
            status=InstallStatus.FETCH_FAILED,
            registry=registry,
            destination=destination,
            error=exc,
        )

    try:
        extracted = pipeline.installer.install(archive_path, destination)
    except EzpkgmError as exc:
        hooks.emit_error(f"Failed to install {project_name}: {exc}")
        return PipelineResult(
            status=InstallStatus.INSTALL_FAILED,
            registry=registry,
            archive_path=archive_path,
            destination=destination,
            error=exc,
        )

    return PipelineResult(
        status=InstallStatus.INSTALLED,
        registry=registry,
        archive_path=archive_path,
        destination=destination,
        extracted=extracted,
    )
