"""Descarga del registro canónico remoto.

Una sola petición GET con el User-Agent de la herramienta. Cualquier fallo se
traduce a la taxonomía del dominio para que el motor de sync lo reporte.
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from adapters.http_client import ClientFactory, default_client_factory
from core.config import AppSettings
from core.domain.errors import HttpStatusError, NetworkError, RemoteFetchError
from core.domain.models import Registry


async def fetch_remote_registry(
    settings: AppSettings,
    *,
    client_factory: ClientFactory | None = None,
) -> Registry:
    url = settings.remote_registry_url
    factory = client_factory or default_client_factory(
        settings, extra_headers={"Accept": "application/json"}
    )

    try:
        async with factory() as client:
            resp = await client.get(url)
    except httpx.HTTPError as exc:
        raise NetworkError(f"Error fetching data from {url}: {exc}") from exc

    if resp.status_code != 200:
        raise HttpStatusError(resp.status_code, url)

    try:
        return Registry.model_validate(resp.json())
    except (ValueError, ValidationError) as exc:
        raise RemoteFetchError(f"Error parsing JSON from {url}: {exc}") from exc
