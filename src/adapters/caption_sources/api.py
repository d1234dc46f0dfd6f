"""Fuente: endpoint JSON del post (método A).

Implementación:
- GET `https://www.instagram.com/p/<shortcode>/?__a=1&__d=dis` con perfil de
  navegador de escritorio completo.
- El body suele ser JSON, pero si la plataforma devuelve HTML (login wall,
  página renderizada) el pipeline sigue probando las estrategias HTML.
"""

from __future__ import annotations

import httpx

from adapters.http_client import fetch_text
from core.config import AppSettings
from core.domain.errors import ExtractionError
from core.domain.models import ExtractionResult, PostReference
from core.domain.post_url import build_api_url
from core.domain.profiles import get_profile
from core.interfaces.caption_source import CaptionSource
from core.services.caption_pipeline import extract_caption


class ApiCaptionSource(CaptionSource):
    name = "api"

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def fetch_caption(self, post: PostReference) -> ExtractionResult:
        url = build_api_url(post.shortcode)
        body = await fetch_text(
            url,
            settings=self._settings,
            profile=get_profile(self._settings.api_profile),
            transport=self._transport,
        )

        result = extract_caption(body)
        if not result.success:
            raise ExtractionError(result.error, details={"source": self.name, "url": url})
        return result
