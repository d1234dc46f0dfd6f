"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar paneles en `extract` y `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ExtractionResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("IGCAP", style="bold cyan")
    subtitle = Text("Instagram caption extractor • API • CLI", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_result_panel(result: ExtractionResult) -> Panel:
    """Panel para presentar un `ExtractionResult` (éxito o fallo)."""

    if not result.success:
        body = Text(result.error or "Unknown error", style="red")
        return Panel(body, title=Text("Extraction failed", style="bold red"), border_style="red")

    body = Text()
    body.append((result.caption or "").strip() + "\n")
    meta = Table.grid(padding=(0, 2))
    meta.add_column(style="dim")
    meta.add_column()
    if result.shortcode:
        meta.add_row("Shortcode", result.shortcode)
    if result.username:
        meta.add_row("Username", result.username)
    if result.likes is not None:
        meta.add_row("Likes", f"{result.likes:,}")
    if result.method:
        meta.add_row("Method", result.method)

    return Panel(
        Group(body, meta),
        title=Text("Caption", style="bold green"),
        border_style="green",
    )
