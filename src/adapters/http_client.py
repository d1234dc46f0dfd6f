"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers (perfil de cliente) y logging.
- Traduce errores de transporte a `FetchError` para que el Core no conozca httpx.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings
from core.domain.errors import FetchError
from core.domain.profiles import ClientProfile, get_profile

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    profile: ClientProfile | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los headers del perfil.

    Por qué un builder:
    - Centraliza timeouts/headers para que ambos métodos se comporten igual.
    - `transport` permite sustituir la red en tests.
    """

    settings = settings or AppSettings()
    profile = profile or get_profile(settings.api_profile)
    headers = profile.headers()
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


async def fetch_text(
    url: str,
    *,
    settings: AppSettings | None = None,
    profile: ClientProfile | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Un único GET (sin reintentos). Devuelve el body o lanza `FetchError`."""

    settings = settings or AppSettings()
    profile = profile or get_profile(settings.api_profile)
    logger.info("GET %s (profile=%s)", url, profile.name)

    try:
        async with build_async_client(settings, profile=profile, transport=transport) as client:
            response = await client.get(url)
    except httpx.TimeoutException as exc:
        logger.warning("Timeout fetching %s: %s", url, exc)
        raise FetchError(
            f"Request timed out after {settings.http_timeout_seconds:g}s",
            url=url,
        ) from exc
    except httpx.HTTPError as exc:
        logger.warning("Network error fetching %s: %s", url, exc)
        raise FetchError("Network error while fetching the post", url=url) from exc

    logger.info("GET %s -> HTTP %s", url, response.status_code)
    if not response.is_success:
        raise FetchError(
            f"Request failed with status code {response.status_code}",
            url=url,
            http_status=response.status_code,
        )
    return response.text
