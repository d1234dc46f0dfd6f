"""Perfiles de cliente (headers "impersonados").

Por qué como datos:
- Los perfiles son configuración, no comportamiento: añadir uno nuevo no
  obliga a tocar el fetcher.
- La plataforma responde distinto según el cliente aparente; tenerlos con
  nombre facilita elegir uno por método desde `AppSettings`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ClientProfile(BaseModel):
    """Identidad HTTP que presentamos a la plataforma."""

    name: str = Field(..., min_length=1, max_length=64)
    user_agent: str = Field(..., min_length=1)
    accept: str | None = Field(
        default=None,
        description="Header Accept (None = el default del cliente HTTP).",
    )
    accept_language: str | None = None
    referer: str | None = None
    extra_headers: dict[str, str] = Field(default_factory=dict)

    def headers(self) -> dict[str, str]:
        """Renderiza el perfil como dict de headers."""

        out: dict[str, str] = {"User-Agent": self.user_agent}
        if self.accept:
            out["Accept"] = self.accept
        if self.accept_language:
            out["Accept-Language"] = self.accept_language
        if self.referer:
            out["Referer"] = self.referer
        out.update(self.extra_headers)
        return out


_HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"

CLIENT_PROFILES: dict[str, ClientProfile] = {
    "desktop_chrome": ClientProfile(
        name="desktop_chrome",
        user_agent=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
        ),
        accept=_HTML_ACCEPT,
        accept_language="en-US,en;q=0.5",
    ),
    "desktop_basic": ClientProfile(
        name="desktop_basic",
        user_agent="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    ),
    "mobile_safari": ClientProfile(
        name="mobile_safari",
        user_agent=(
            "Mozilla/5.0 (iPhone; CPU iPhone OS 16_5 like Mac OS X) AppleWebKit/605.1.15 "
            "(KHTML, like Gecko) Version/16.5 Mobile/15E148 Safari/604.1"
        ),
        accept=_HTML_ACCEPT,
        accept_language="en-US,en;q=0.9",
        referer="https://www.instagram.com/",
    ),
    # Crawler de previews de enlaces: suele recibir las meta og:* completas.
    "facebook_crawler": ClientProfile(
        name="facebook_crawler",
        user_agent="facebookexternalhit/1.1 (+http://www.facebook.com/externalhit_uagent.php)",
        accept="text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        accept_language="en-US,en;q=0.9",
    ),
}


def get_profile(name: str) -> ClientProfile:
    """Devuelve el perfil registrado con ese nombre (KeyError si no existe)."""

    return CLIENT_PROFILES[name.strip().lower()]
