"""Descarga de archivos fuente con seguimiento explícito de redirects.

Máquina de estados por salto:
- 301/302 -> leer `Location` y repetir contra la nueva URL (con límite).
- 200     -> volcar el cuerpo en streaming al archivo temporal.
- otro    -> `HttpStatusError`, sin reintentos.

El archivo temporal queda en disco al terminar: borrarlo es responsabilidad
del instalador (un único dueño por fase).
"""

from __future__ import annotations

from pathlib import Path

import httpx

from adapters.http_client import ClientFactory, default_client_factory
from core.config import AppSettings
from core.domain.errors import (
    FilesystemError,
    HttpStatusError,
    NetworkError,
    RemoteFetchError,
    TooManyRedirectsError,
)
from core.domain.models import DownloadTask, ProjectRecord, Registry
from core.services.hooks import PipelineHooks

REDIRECT_STATUSES = frozenset({301, 302})


def build_archive_url(template: str, project_name: str, record: ProjectRecord, ext: str) -> str:
    return template.format(
        project=project_name,
        repo=record.repo,
        version=record.version,
        ext=ext,
    )


def archive_path_for(download_dir: Path, project_name: str, version: str, ext: str) -> Path:
    return download_dir / f"{project_name}-{version}.{ext}"


def _content_length(response: httpx.Response) -> int | None:
    value = response.headers.get("content-length")
    if value and value.isdigit():
        return int(value)
    return None


class ArchiveFetcher:
    """Resolves a project's archive URL and downloads it to a temporary file."""

    def __init__(
        self,
        settings: AppSettings,
        hooks: PipelineHooks | None = None,
        *,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._settings = settings
        self._hooks = hooks or PipelineHooks()
        self._client_factory = client_factory or default_client_factory(settings)

    def plan(self, project_name: str, record: ProjectRecord) -> DownloadTask:
        settings = self._settings
        ext = settings.archive_extension
        return DownloadTask(
            url=build_archive_url(settings.archive_url_template, project_name, record, ext),
            project_name=project_name,
            version=record.version,
            destination=Path(record.origin),
            archive_path=archive_path_for(settings.download_dir, project_name, record.version, ext),
        )

    async def fetch(self, project_name: str, registry: Registry) -> Path:
        """Look the project up and download its archive.

        Raises `ProjectNotFoundError` before any network activity when the
        project is not in `registry`.
        """

        record = registry.get_project(project_name)
        self._hooks.emit_debug(f"Project info: {record.model_dump(by_alias=True)}")
        return await self.download(project_name, record)

    async def download(self, project_name: str, record: ProjectRecord) -> Path:
        task = self.plan(project_name, record)
        self._hooks.emit_info(f"Downloading {project_name} from {task.url}...")

        async with self._client_factory() as client:
            while True:
                next_url = await self._request(client, task)
                if next_url is None:
                    break
                if task.hops >= self._settings.max_redirects:
                    raise TooManyRedirectsError(self._settings.max_redirects, next_url)
                task.hops += 1
                task.url = next_url
                self._hooks.emit_info(f"Redirected to: {next_url}")

        self._hooks.emit_success(f"Downloaded {task.archive_path}")
        return task.archive_path

    async def _request(self, client: httpx.AsyncClient, task: DownloadTask) -> str | None:
        """One hop. Returns the redirect target, or None once the body is on disk."""

        try:
            async with client.stream("GET", task.url) as response:
                status = response.status_code
                if status in REDIRECT_STATUSES:
                    location = response.headers.get("location")
                    if not location:
                        raise RemoteFetchError(f"HTTP {status} from {task.url} without Location header")
                    return str(response.url.join(location))
                if status != 200:
                    raise HttpStatusError(status, task.url)
                await self._write_body(response, task.archive_path)
                return None
        except httpx.HTTPError as exc:
            raise NetworkError(f"Error downloading {task.url}: {exc}") from exc

    async def _write_body(self, response: httpx.Response, archive_path: Path) -> None:
        total = _content_length(response)
        written = 0
        try:
            archive_path.parent.mkdir(parents=True, exist_ok=True)
            with archive_path.open("wb") as fh:
                async for chunk in response.aiter_bytes():
                    fh.write(chunk)
                    written += len(chunk)
                    self._hooks.emit_progress(written, total)
        except OSError as exc:
            archive_path.unlink(missing_ok=True)
            raise FilesystemError(f"Could not write {archive_path}: {exc}") from exc
        except httpx.HTTPError:
            # Descarga a medias: no debe sobrevivir al intento.
            archive_path.unlink(missing_ok=True)
            raise
