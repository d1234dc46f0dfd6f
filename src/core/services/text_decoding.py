"""Normalización del texto capturado por las estrategias.

Orden fijo: entidades HTML -> secuencias de escape -> strip -> limpieza de
sustitutos UTF-16 sueltos.
Todas las funciones son idempotentes sobre texto sin entidades ni escapes.
"""

from __future__ import annotations

import re

# Solo estas cinco: un caption con `&` suelto ("Salt&pepper") es texto, no HTML.
_ENTITIES: dict[str, str] = {
    "&quot;": '"',
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&#039;": "'",
}
_ENTITY_RE = re.compile("|".join(re.escape(e) for e in _ENTITIES))
_REVERSE_ENTITIES: dict[str, str] = {char: entity for entity, char in _ENTITIES.items()}
_REVERSE_RE = re.compile("[" + re.escape("".join(_REVERSE_ENTITIES)) + "]")

# Una o más `\uXXXX` consecutivas, para poder recombinar pares sustitutos.
_UNICODE_RUN_RE = re.compile(r"(?:\\u[0-9a-fA-F]{4})+")


def decode_html_entities(text: str) -> str:
    """`&quot;`, `&amp;`, `&lt;`, `&gt;`, `&#039;` en una sola pasada.

    Una sola pasada: `&amp;lt;` queda como `&lt;` literal.
    """

    if "&" not in text:
        return text
    return _ENTITY_RE.sub(lambda m: _ENTITIES[m.group(0)], text)


def encode_html_entities(text: str) -> str:
    """Inversa exacta de `decode_html_entities`.

    Para texto que un parser HTML ya decodificó (BeautifulSoup): así la
    normalización común no lo decodifica dos veces.
    """

    return _REVERSE_RE.sub(lambda m: _REVERSE_ENTITIES[m.group(0)], text)


def scrub_surrogates(text: str) -> str:
    """Sustitutos UTF-16 sueltos -> U+FFFD (no se pueden serializar a UTF-8)."""

    return text.encode("utf-16", "surrogatepass").decode("utf-16", errors="replace")


def _decode_unicode_run(match: re.Match[str]) -> str:
    raw = match.group(0)
    units = [int(raw[i + 2 : i + 6], 16) for i in range(0, len(raw), 6)]
    data = b"".join(u.to_bytes(2, "big") for u in units)
    # surrogatepass deja pasar sustitutos sueltos; se reemplazan abajo.
    return scrub_surrogates(data.decode("utf-16-be", errors="surrogatepass"))


def decode_escape_sequences(text: str) -> str:
    """`\\n` literal -> salto de línea, `\\uXXXX` -> carácter (emoji incluidos)."""

    if "\\" not in text:
        return text
    text = text.replace("\\n", "\n")
    return _UNICODE_RUN_RE.sub(_decode_unicode_run, text)


def normalize_caption(text: str | None) -> str:
    if not text:
        return ""
    return scrub_surrogates(decode_escape_sequences(decode_html_entities(text)).strip())
