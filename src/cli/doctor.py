"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.profiles import CLIENT_PROFILES, get_profile

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

PLATFORM_HOME = "https://www.instagram.com/"


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings, profile=get_profile(settings.page_profile)) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or exc.__class__.__name__


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the connectivity check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="IGCAP Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Listen address", "OK", f"{settings.host}:{settings.port}")
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("API profile", "OK", settings.api_profile)
    table.add_row("Page profile", "OK", settings.page_profile)
    table.add_row(
        "Fallback",
        "OK" if settings.fallback_enabled else "DISABLED",
        "API endpoint -> public page" if settings.fallback_enabled else "API endpoint only",
    )
    table.add_row("Known profiles", "OK", ", ".join(sorted(CLIENT_PROFILES)))

    static_ok = settings.static_dir.is_dir()
    table.add_row(
        "Static dir",
        "OK" if static_ok else "MISSING",
        str(settings.static_dir.resolve()),
    )

    # Connectivity (best-effort)
    ok_http = True
    if offline:
        table.add_row("HTTP connectivity", "SKIPPED", "--offline")
    else:
        ok_http, detail_http = asyncio.run(_check_http(PLATFORM_HOME, settings))
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not static_ok:
        _console.print(
            "\n[yellow]Note:[/yellow] Without a static directory the API still works; only `/` is disabled."
        )
    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] The platform is unreachable from here; every extraction will fail with a fetch error."
        )
