"""Fuente: página pública del post (método B).

Implementación:
- GET a la URL original con un User-Agent mínimo.
- Scraping best-effort: ld+json, markup de caption, og:description, etc.
"""

from __future__ import annotations

import httpx

from adapters.http_client import fetch_text
from core.config import AppSettings
from core.domain.errors import ExtractionError
from core.domain.models import ExtractionResult, PostReference
from core.domain.profiles import get_profile
from core.interfaces.caption_source import CaptionSource
from core.services.caption_pipeline import extract_caption


class PageCaptionSource(CaptionSource):
    name = "page"

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def fetch_caption(self, post: PostReference) -> ExtractionResult:
        body = await fetch_text(
            post.url,
            settings=self._settings,
            profile=get_profile(self._settings.page_profile),
            transport=self._transport,
        )

        result = extract_caption(body)
        if not result.success:
            raise ExtractionError(result.error, details={"source": self.name, "url": post.url})
        return result
