"""CLI principal (Typer).

Comandos:
- `serve`   levanta la API HTTP con uvicorn.
- `extract` ejecuta una extracción puntual y la muestra con Rich (o JSON).
- `doctor`  diagnósticos de entorno.
"""

from __future__ import annotations

import asyncio
import json

import typer
import uvicorn
from rich.console import Console

from cli.doctor import app as doctor_app
from cli.ui_components import build_result_panel, print_banner
from core.config import AppSettings
from core.log_config import configure_logging
from core.services.caption_service import CaptionService

app = typer.Typer(
    no_args_is_help=True,
    help="Extract captions from public Instagram posts and reels.",
)
app.add_typer(doctor_app, name="doctor")

_console = Console()


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Listen address (default: settings)."),
    port: int | None = typer.Option(None, "--port", "-p", help="Listen port (default: settings / $PORT)."),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes (development)."),
) -> None:
    """Run the HTTP API."""

    settings = AppSettings()
    configure_logging(settings.log_level)
    bind_host = host or settings.host
    bind_port = port or settings.port

    print_banner(_console)
    _console.print(f"Server is running on [bold]http://{bind_host}:{bind_port}[/bold]")

    uvicorn.run(
        "api.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command()
def extract(
    url: str = typer.Argument(..., help="Post or reel URL."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON."),
    no_fallback: bool = typer.Option(False, "--no-fallback", help="Only try the API endpoint."),
) -> None:
    """Extract the caption of a single post."""

    settings = AppSettings()
    if no_fallback:
        settings = settings.model_copy(update={"fallback_enabled": False})
    configure_logging("WARNING" if as_json else settings.log_level)

    response = asyncio.run(CaptionService(settings).handle(url))

    if as_json:
        typer.echo(json.dumps(response.result.model_dump(exclude_none=True), ensure_ascii=False, indent=2))
    else:
        _console.print(build_result_panel(response.result))

    if not response.ok:
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
