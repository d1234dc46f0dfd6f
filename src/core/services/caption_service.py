"""Orquestación de una extracción (handler de request).

Flujo:
    recibido -> validado -> shortcode resuelto -> descargado -> extraído -> respondido

Cada estado puede terminar en un error propio (ver `core.domain.errors`).
El único reintento del sistema es el método alternativo: si la fuente primaria
falla, se prueba una vez la secundaria y se responde con lo que haya.

Este módulo no conoce FastAPI: devuelve `HandlerResponse` (status + resultado)
para que la API, la CLI o los tests lo consuman igual.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import httpx

from adapters.caption_sources import ApiCaptionSource, PageCaptionSource
from core.config import AppSettings
from core.domain.errors import (
    CaptionExtractorError,
    ExtractionError,
    FetchError,
    IdentifierError,
    InputError,
    InternalError,
)
from core.domain.models import ExtractionResult, PostReference
from core.domain.post_url import extract_shortcode, is_valid_post_url
from core.interfaces.caption_source import CaptionSource

logger = logging.getLogger(__name__)

MISSING_URL_MESSAGE = "URL is required"


@dataclass
class HandlerResponse:
    """Resultado listo para transporte."""

    status_code: int
    result: ExtractionResult

    @property
    def ok(self) -> bool:
        return self.result.success


def resolve_post(url: str | None) -> PostReference:
    """Validación + shortcode. Lanza `InputError` / `IdentifierError`."""

    if url is None or not isinstance(url, str) or not url.strip():
        raise InputError(MISSING_URL_MESSAGE)
    url = url.strip()
    if not is_valid_post_url(url):
        raise InputError(details={"url": url})
    shortcode = extract_shortcode(url)
    if not shortcode:
        raise IdentifierError(details={"url": url})
    return PostReference(url=url, shortcode=shortcode)


class CaptionService:
    """Handler de extracción con fallback a un método alternativo."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        sources: Sequence[CaptionSource] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        if sources is None:
            sources = (
                ApiCaptionSource(self._settings, transport=transport),
                PageCaptionSource(self._settings, transport=transport),
            )
        if not sources:
            raise ValueError("CaptionService needs at least one caption source")
        self._sources = tuple(sources)

    @property
    def sources(self) -> tuple[CaptionSource, ...]:
        return self._sources

    def _attempt_sources(self) -> tuple[CaptionSource, ...]:
        if self._settings.fallback_enabled:
            return self._sources[:2]
        return self._sources[:1]

    async def extract(self, url: str | None) -> ExtractionResult:
        """Versión que lanza: errores del dominio se propagan tal cual."""

        post = resolve_post(url)

        failures: list[CaptionExtractorError] = []
        for index, source in enumerate(self._attempt_sources()):
            if index:
                logger.info("Primary method failed for %s, trying %s", post.shortcode, source.name)
            try:
                result = await source.fetch_caption(post)
            except (FetchError, ExtractionError) as exc:
                logger.warning("Source %s failed for %s: %s", source.name, post.shortcode, exc)
                failures.append(exc)
                continue
            return result.model_copy(update={"shortcode": post.shortcode})

        raise self._combined_failure(failures, post)

    @staticmethod
    def _combined_failure(
        failures: Sequence[CaptionExtractorError],
        post: PostReference,
    ) -> CaptionExtractorError:
        # Si algún método llegó a descargar contenido, el problema es de extracción.
        attempts = [type(f).__name__ for f in failures]
        if any(isinstance(f, ExtractionError) for f in failures):
            return ExtractionError(details={"shortcode": post.shortcode, "attempts": attempts})
        last = failures[-1] if failures else None
        message = last.message if isinstance(last, FetchError) else None
        return FetchError(message, url=post.url, details={"shortcode": post.shortcode, "attempts": attempts})

    async def handle(self, url: str | None) -> HandlerResponse:
        """Punto de entrada del transporte: nunca lanza."""

        try:
            result = await self.extract(url)
        except CaptionExtractorError as exc:
            return HandlerResponse(exc.status_code, ExtractionResult.failure(exc.public_message))
        except Exception:
            logger.exception("Unexpected error while extracting caption")
            error = InternalError()
            return HandlerResponse(error.status_code, ExtractionResult.failure(error.public_message))
        return HandlerResponse(200, result)
