"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y User-Agent para el registro remoto y las descargas.
- Facilita testeo: se puede sustituir por un cliente con `httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Callable

import httpx

from core.config import AppSettings

ClientFactory = Callable[[], httpx.AsyncClient]


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults de la herramienta.

    Los redirects NO se siguen automáticamente: `ArchiveFetcher` los recorre
    explícitamente con un límite de saltos.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
    )


def default_client_factory(
    settings: AppSettings,
    *,
    extra_headers: dict[str, str] | None = None,
) -> ClientFactory:
    def factory() -> httpx.AsyncClient:
        return build_async_client(settings, extra_headers=extra_headers)

    return factory
