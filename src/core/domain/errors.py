"""Taxonomía de errores del dominio.

Por qué una jerarquía propia:
- El handler necesita distinguir "no se pudo descargar" de "se descargó pero
  no hay caption" sin inspeccionar excepciones de httpx.
- Cada error sabe su status HTTP y el mensaje que es seguro mostrar al cliente.
"""

from __future__ import annotations

from typing import Any


class CaptionExtractorError(Exception):
    """Base de todos los errores conocidos del extractor."""

    status_code: int = 500
    default_message: str = "Caption extraction failed"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def public_message(self) -> str:
        return self.message

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InputError(CaptionExtractorError):
    """URL ausente o con forma inválida."""

    status_code = 400
    default_message = "Invalid Instagram URL"


class IdentifierError(CaptionExtractorError):
    """La URL pasó la validación pero no se pudo derivar el shortcode."""

    status_code = 400
    default_message = "Could not extract shortcode from URL"


class FetchError(CaptionExtractorError):
    """Fallo de red, timeout o status no-2xx."""

    status_code = 500
    default_message = "Could not fetch the post. It might be private or the request was blocked."

    def __init__(
        self,
        message: str | None = None,
        *,
        url: str | None = None,
        http_status: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        merged = dict(details or {})
        if url is not None:
            merged["url"] = url
        if http_status is not None:
            merged["http_status"] = http_status
        super().__init__(message, merged)
        self.url = url
        self.http_status = http_status


class ExtractionError(CaptionExtractorError):
    """El contenido se descargó pero ninguna estrategia encontró caption."""

    status_code = 500
    default_message = "Caption not found in page"


class InternalError(CaptionExtractorError):
    """Fallo inesperado; nunca expone el detalle interno al cliente."""

    status_code = 500
    default_message = "Internal server error"

    @property
    def public_message(self) -> str:
        return self.default_message
