"""Configuración de logging (Rich).

Por qué aquí:
- CLI y API comparten el mismo formato sin duplicar handlers.
- Solo configura el root logger si nadie lo hizo antes (pytest, uvicorn).
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | None = None, *, console: Console | None = None) -> None:
    chosen = (level or "INFO").upper()
    lvl = getattr(logging, chosen, logging.INFO)
    root = logging.getLogger()

    if not root.handlers:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        logging.basicConfig(
            level=lvl,
            format="%(name)s: %(message)s",
            datefmt="[%X]",
            handlers=[handler],
        )
    else:
        root.setLevel(lvl)

    # httpx loguea cada request en INFO; ya lo hacemos nosotros.
    logging.getLogger("httpx").setLevel(max(lvl, logging.WARNING))
