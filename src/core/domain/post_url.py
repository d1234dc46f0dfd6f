"""Reglas puras sobre URLs de posts (validación + shortcode).

Sin I/O ni excepciones: se usan antes de cualquier llamada de red.
"""

from __future__ import annotations

import re

_POST_URL_RE = re.compile(
    r"^https?://(www\.)?(instagram\.com|instagr\.am)/(reel|reels|p)/[\w-]+",
    re.IGNORECASE,
)
_SHORTCODE_RE = re.compile(r"/(reel|reels|p)/([A-Za-z0-9_-]+)")

API_URL_TEMPLATE = "https://www.instagram.com/p/{shortcode}/?__a=1&__d=dis"


def is_valid_post_url(url: str) -> bool:
    if not isinstance(url, str):
        return False
    return _POST_URL_RE.match(url.strip()) is not None


def extract_shortcode(url: str) -> str | None:
    """Devuelve el token que sigue a `/reel/`, `/reels/` o `/p/` (o None)."""

    if not isinstance(url, str):
        return None
    match = _SHORTCODE_RE.search(url)
    return match.group(2) if match else None


def build_api_url(shortcode: str) -> str:
    return API_URL_TEMPLATE.format(shortcode=shortcode)
