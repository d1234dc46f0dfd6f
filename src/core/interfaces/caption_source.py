"""Contrato de fuentes de captions.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el endpoint JSON y la página pública sean intercambiables
  y testeables sin acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ExtractionResult, PostReference


@runtime_checkable
class CaptionSource(Protocol):
    """Contrato mínimo para un método de obtención.

    Reglas de diseño:
    - `fetch_caption` es asíncrono porque hace I/O (HTTP).
    - Devuelve un `ExtractionResult` exitoso o lanza `FetchError` /
      `ExtractionError`; nunca devuelve un fallo silencioso.
    """

    name: str

    async def fetch_caption(self, post: PostReference) -> ExtractionResult:
        """Descarga el contenido del post y extrae el caption."""

        ...
