"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI ni la API.
- Permite que adaptadores (HTTP) y servicios lean config de forma consistente.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.profiles import CLIENT_PROFILES


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/API/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="IGCAP_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    host: str = Field(
        default="0.0.0.0",
        min_length=1,
        description="Dirección de escucha del servidor HTTP.",
    )
    # `PORT` a secas se respeta por compatibilidad con plataformas tipo PaaS.
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("IGCAP_PORT", "PORT"),
        description="Puerto de escucha del servidor HTTP.",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request saliente (segundos).",
    )
    api_profile: str = Field(
        default="desktop_chrome",
        description="Perfil de cliente para el endpoint JSON (método A).",
    )
    page_profile: str = Field(
        default="desktop_basic",
        description="Perfil de cliente para la página pública (método B).",
    )
    fallback_enabled: bool = Field(
        default=True,
        description="Permite un único intento alternativo si el método A falla.",
    )

    static_dir: Path = Field(
        default=Path("public"),
        description="Directorio servido en `/` (se omite si no existe).",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Orígenes permitidos por CORS.",
    )
    log_level: str = Field(
        default="INFO",
        min_length=1,
        description="Nivel de logging raíz (DEBUG, INFO, WARNING...).",
    )

    @field_validator("api_profile", "page_profile")
    @classmethod
    def _known_profile(cls, value: str) -> str:
        name = value.strip().lower()
        if name not in CLIENT_PROFILES:
            known = ", ".join(sorted(CLIENT_PROFILES))
            raise ValueError(f"Unknown client profile '{value}' (known: {known})")
        return name

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()
