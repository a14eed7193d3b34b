"""Weather report service CLI application.

This module provides the command-line interface for the PWS report
service: the HTTP server, one-shot reports and configuration checks.
"""

from __future__ import annotations

import logging
import sys
from typing import Final

import typer

from pwsreport.controller import ReportService
from pwsreport.errors import PwsReportError, StartupError
from pwsreport.server import ReportServer
from pwsreport.settings import EnvironmentSettings

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="PWS current-conditions report service", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "pwsreport.cli"

# Options for the main command
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
HOST_OPTION = typer.Option("0.0.0.0", "--host", help="Interface to listen on")
PORT_OPTION = typer.Option(None, "--port", "-p", help="Listen port (default: $PORT or 8080)")
HTML_OPTION = typer.Option(False, "--html", help="Render HTML instead of plain text")


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _start() -> tuple[EnvironmentSettings, ReportService]:
    """Load settings and run the startup sequence, exiting on failure."""
    try:
        settings = EnvironmentSettings.load()
        return settings, ReportService.bootstrap(settings)
    except StartupError as exc:
        logger.error("Startup failed: %s", exc)
        typer.secho(f"Startup failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def serve(
    host: str = HOST_OPTION,
    port: int | None = PORT_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Authenticate, then serve the report on GET /."""
    _configure_logging(debug)
    settings, service = _start()

    server = ReportServer(service, host=host, port=port or settings.port)
    logger.info("Serving current conditions on %s", server.url)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()


@app.command()
def report(html: bool = HTML_OPTION, debug: bool = DEBUG_OPTION) -> None:
    """Print one current-conditions report and exit."""
    _configure_logging(debug)
    _, service = _start()

    try:
        typer.echo(service.render_report("html" if html else "text"), nl=False)
    except PwsReportError as exc:
        typer.secho(f"Report failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("check")
def check_config(debug: bool = DEBUG_OPTION) -> None:
    """Run the startup sequence and print the station config."""
    _configure_logging(debug)
    _, service = _start()

    for name, value in service.config.masked().items():
        typer.echo(f"{name}: {value}")
    typer.echo("✅ Config valid")


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
