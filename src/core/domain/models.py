"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El mismo modelo sirve de contrato JSON para la API y la CLI.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class ExtractionRequest(BaseModel):
    """Petición entrante: una URL de post.

    `url` es opcional a nivel de esquema para que la ausencia se reporte como
    error de entrada propio (400) y no como fallo genérico de validación.
    """

    model_config = ConfigDict(extra="ignore")

    url: str | None = Field(
        default=None,
        description="URL pública del post/reel.",
    )


class ExtractionResult(BaseModel):
    """Resultado de una extracción (éxito o fallo estructurado).

    Reglas:
    - `caption` presente solo si `success`.
    - `error` presente solo si no `success`.
    """

    success: bool = Field(
        ...,
        description="Indica si se obtuvo un caption no vacío.",
    )
    caption: str | None = Field(
        default=None,
        description="Texto del caption ya decodificado y recortado.",
    )
    error: str | None = Field(
        default=None,
        description="Motivo legible del fallo.",
    )
    username: str | None = Field(
        default=None,
        description="Autor atribuido, si la fuente lo expone.",
    )
    likes: int | None = Field(
        default=None,
        ge=0,
        description="Likes, si la fuente los expone.",
    )
    method: str | None = Field(
        default=None,
        description="Estrategia que produjo el caption (api, meta-tags, ...).",
    )
    shortcode: str | None = Field(
        default=None,
        description="Identificador del post derivado de la URL.",
    )

    @classmethod
    def failure(cls, error: str) -> "ExtractionResult":
        return cls(success=False, error=error)


@dataclass(frozen=True)
class CaptionMatch:
    """Salida de una estrategia de extracción antes de armar el resultado."""

    caption: str
    method: str
    username: str | None = None
    likes: int | None = None

    def to_result(self) -> ExtractionResult:
        return ExtractionResult(
            success=True,
            caption=self.caption,
            username=self.username,
            likes=self.likes,
            method=self.method,
        )


@dataclass(frozen=True)
class PostReference:
    """Post ya validado: URL original + shortcode derivado."""

    url: str
    shortcode: str
