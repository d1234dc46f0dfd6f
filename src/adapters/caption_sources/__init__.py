"""Fuentes de captions (métodos de obtención concretos).

Por qué un paquete:
- Agrupa un módulo por método (endpoint JSON, página pública).
- Cada módulo implementa `core.interfaces.caption_source.CaptionSource`.
"""

from adapters.caption_sources.api import ApiCaptionSource
from adapters.caption_sources.page import PageCaptionSource

__all__ = [
	"ApiCaptionSource",
	"PageCaptionSource",
]
