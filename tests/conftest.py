"""Shared fixtures: settings pointed at tmp_path, fake HTTP, recorded hooks."""

from __future__ import annotations

import io
import json
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import httpx
import pytest

from core.config import AppSettings
from core.services.hooks import PipelineHooks

REMOTE_URL = "https://registry.test/config.json"
ARCHIVE_TEMPLATE = "https://github.test/ezpkgm/{repo}/archive/refs/tags/{version}.{ext}"


@dataclass
class RecordedHooks:
    messages: list[tuple[str, str]] = field(default_factory=list)
    progress: list[tuple[int, int | None]] = field(default_factory=list)

    def hooks(self) -> PipelineHooks:
        return PipelineHooks(
            debug=lambda m: self.messages.append(("debug", m)),
            info=lambda m: self.messages.append(("info", m)),
            success=lambda m: self.messages.append(("success", m)),
            warning=lambda m: self.messages.append(("warning", m)),
            error=lambda m: self.messages.append(("error", m)),
            download_progress=lambda w, t: self.progress.append((w, t)),
        )

    def of(self, level: str) -> list[str]:
        return [m for lvl, m in self.messages if lvl == level]


@dataclass
class FakeServer:
    """`httpx.MockTransport` handler driven by a url -> response table."""

    routes: dict[str, Callable[[httpx.Request], httpx.Response]] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(str(request.url))
        if handler is None:
            return httpx.Response(404)
        return handler(request)

    def redirect(self, url: str, location: str, status: int = 302) -> None:
        self.routes[url] = lambda request: httpx.Response(status, headers={"Location": location})

    def serve(self, url: str, content: bytes, status: int = 200) -> None:
        self.routes[url] = lambda request: httpx.Response(status, content=content)

    def serve_json(self, url: str, payload: object) -> None:
        self.routes[url] = lambda request: httpx.Response(200, json=payload)

    def client_factory(self) -> Callable[[], httpx.AsyncClient]:
        def factory() -> httpx.AsyncClient:
            return httpx.AsyncClient(
                transport=httpx.MockTransport(self),
                headers={"User-Agent": "ezpkgm-package-manager/1.0"},
            )

        return factory


def make_zip(entries: dict[str, bytes], compression: int = zipfile.ZIP_DEFLATED) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=compression) as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return buffer.getvalue()


def write_registry(path: Path, document: dict) -> Path:
    path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def recorded() -> RecordedHooks:
    return RecordedHooks()


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        registry_path=tmp_path / "config.json",
        remote_registry_url=REMOTE_URL,
        archive_url_template=ARCHIVE_TEMPLATE,
        download_dir=tmp_path / "downloads",
    )
