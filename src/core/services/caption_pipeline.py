"""Pipeline de extracción de captions.

Idea:
- Cada estrategia es una función pura `body -> CaptionMatch | None`.
- `first_success` las compone en orden fijo y corta en el primer caption que,
  ya normalizado, no quede vacío.

Orden canónico (de más a menos estructurado):
1. payload JSON de la API (items[0] / graphql.shortcode_media)
2. <script type="application/ld+json">
3. contenedor de caption del markup embebido (div.Caption)
4. meta og:description
5. fragmentos inline `"caption":"..."`
6. blob `window._sharedData`

Nota:
- Es best-effort: si la plataforma cambia su markup, las estrategias dejan de
  coincidir en silencio y el resultado es un "not found" normal.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Iterable, Sequence

from bs4 import BeautifulSoup

from core.domain.models import CaptionMatch, ExtractionResult
from core.services.text_decoding import encode_html_entities, normalize_caption, scrub_surrogates

logger = logging.getLogger(__name__)

Strategy = Callable[[str], "CaptionMatch | None"]

NOT_FOUND_MESSAGE = "Caption not found in page"
UNKNOWN_USERNAME = "Unknown"

_LD_JSON_RE = re.compile(
    r'<script type="application/ld\+json"[^>]*>(.*?)</script>',
    re.IGNORECASE | re.DOTALL,
)
_OG_DESCRIPTION_RE = re.compile(
    r'<meta\s+property="og:description"\s+content="(.*?)"',
    re.IGNORECASE | re.DOTALL,
)
_INLINE_CAPTION_RE = re.compile(r'"caption"\s*:\s*"((?:[^"\\]|\\.)*)"')
_INLINE_CAPTION_TEXT_RE = re.compile(
    r'"edge_media_to_caption"\s*:\s*\{\s*"edges"\s*:\s*\[\s*\{\s*"node"\s*:\s*\{\s*"text"\s*:\s*"((?:[^"\\]|\\.)*)"'
)
_SHARED_DATA_RE = re.compile(
    r"window\._sharedData\s*=\s*(\{.*?\});?\s*</script>",
    re.DOTALL,
)


# ---------------------------------------------------------------------------
# Helpers de navegación


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return None


def _media_node(data: Any) -> dict[str, Any] | None:
    """`items[0]` o `graphql.shortcode_media`, en ese orden."""

    root = _as_dict(data)
    item = _first(root.get("items"))
    if isinstance(item, dict) and item:
        return item
    media = _as_dict(root.get("graphql")).get("shortcode_media")
    if isinstance(media, dict) and media:
        return media
    return None


def _caption_from_media(media: dict[str, Any]) -> str:
    edges = _as_dict(media.get("edge_media_to_caption")).get("edges")
    node_text = _as_dict(_as_dict(_first(edges)).get("node")).get("text")
    if isinstance(node_text, str) and node_text:
        return node_text
    caption_text = _as_dict(media.get("caption")).get("text")
    if isinstance(caption_text, str) and caption_text:
        return caption_text
    title = media.get("title")
    if isinstance(title, str) and title:
        return title
    return ""


def _likes_from_media(media: dict[str, Any]) -> int:
    for candidate in (
        media.get("like_count"),
        _as_dict(media.get("edge_liked_by")).get("count"),
        _as_dict(media.get("edge_media_preview_like")).get("count"),
    ):
        if isinstance(candidate, int) and not isinstance(candidate, bool) and candidate > 0:
            return candidate
    return 0


def _match_from_media(media: dict[str, Any], method: str) -> CaptionMatch | None:
    caption = _caption_from_media(media)
    if not caption:
        return None
    username = _as_dict(media.get("owner")).get("username") or _as_dict(media.get("user")).get("username")
    return CaptionMatch(
        caption=caption,
        method=method,
        username=username if isinstance(username, str) and username else UNKNOWN_USERNAME,
        likes=_likes_from_media(media),
    )


def _decode_json_string(raw: str) -> str:
    """Decodifica el contenido de un literal string JSON (`\\"`, `\\/`, ...)."""

    decoded = _load_json(f'"{raw}"')
    return decoded if isinstance(decoded, str) else raw


# ---------------------------------------------------------------------------
# Estrategias


def structured_payload(body: str | dict[str, Any]) -> CaptionMatch | None:
    """Respuesta JSON de la API (o ya parseada)."""

    data = body if isinstance(body, dict) else _load_json(body)
    media = _media_node(data)
    if media is None:
        return None
    return _match_from_media(media, "api")


def ld_json_script(body: str) -> CaptionMatch | None:
    match = _LD_JSON_RE.search(body)
    if not match:
        return None
    data = _load_json(match.group(1).strip())
    candidates = data if isinstance(data, list) else [data]
    for entry in candidates:
        caption = _as_dict(entry).get("caption")
        if isinstance(caption, str) and caption:
            author = _as_dict(_as_dict(entry).get("author"))
            username = author.get("alternateName") or author.get("name")
            return CaptionMatch(
                caption=caption,
                method="scraping",
                username=username.lstrip("@") if isinstance(username, str) and username else None,
            )
    return None


def caption_markup(body: str) -> CaptionMatch | None:
    """`<div class="Caption">` del markup embebido."""

    if 'class="Caption"' not in body:
        return None
    soup = BeautifulSoup(body, "html.parser")
    container = soup.find("div", class_="Caption")
    if container is None:
        return None

    username = None
    user_link = container.find("a", class_="CaptionUsername")
    if user_link is not None:
        username = user_link.get_text(strip=True) or None
        user_link.extract()
    comments = container.find("div", class_="CaptionComments")
    if comments is not None:
        comments.extract()
    for br in container.find_all("br"):
        br.replace_with("\n")

    text = container.get_text()
    if not text.strip():
        return None
    # El parser ya decodificó entidades; se re-codifican para decodificar una sola vez.
    return CaptionMatch(caption=encode_html_entities(text), method="caption-markup", username=username)


def og_description(body: str) -> CaptionMatch | None:
    match = _OG_DESCRIPTION_RE.search(body)
    if not match or not match.group(1):
        return None
    return CaptionMatch(caption=match.group(1), method="meta-tags")


def inline_caption_fragment(body: str) -> CaptionMatch | None:
    for pattern in (_INLINE_CAPTION_TEXT_RE, _INLINE_CAPTION_RE):
        match = pattern.search(body)
        if match and match.group(1):
            return CaptionMatch(caption=_decode_json_string(match.group(1)), method="inline-json")
    return None


def shared_data_blob(body: str) -> CaptionMatch | None:
    match = _SHARED_DATA_RE.search(body)
    if not match:
        return None
    data = _as_dict(_load_json(match.group(1)))
    post_page = _first(_as_dict(data.get("entry_data")).get("PostPage"))
    media = _media_node(post_page)
    if media is None:
        return None
    return _match_from_media(media, "shared-data")


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    structured_payload,
    ld_json_script,
    caption_markup,
    og_description,
    inline_caption_fragment,
    shared_data_blob,
)


# ---------------------------------------------------------------------------
# Combinador


def first_success(strategies: Iterable[Strategy]) -> Callable[[str], CaptionMatch | None]:
    """Compone estrategias: gana la primera con caption no vacío tras normalizar."""

    ordered: Sequence[Strategy] = tuple(strategies)

    def run(body: str) -> CaptionMatch | None:
        for strategy in ordered:
            match = strategy(body)
            if match is None:
                continue
            caption = normalize_caption(match.caption)
            if not caption:
                logger.debug("Strategy %s matched an empty caption", strategy.__name__)
                continue
            logger.debug("Caption matched by strategy %s", strategy.__name__)
            return CaptionMatch(
                caption=caption,
                method=match.method,
                username=scrub_surrogates(match.username) if match.username else match.username,
                likes=match.likes,
            )
        return None

    return run


def extract_caption(
    body: str | None,
    strategies: Iterable[Strategy] = DEFAULT_STRATEGIES,
) -> ExtractionResult:
    """Ejecuta el pipeline y devuelve un resultado (nunca lanza por "not found")."""

    if not body:
        return ExtractionResult.failure(NOT_FOUND_MESSAGE)
    match = first_success(strategies)(body)
    if match is None:
        return ExtractionResult.failure(NOT_FOUND_MESSAGE)
    return match.to_result()
