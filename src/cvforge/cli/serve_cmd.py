"""Serve command: run the HTTP API with uvicorn."""

from __future__ import annotations

from typing import Optional

import typer
import uvicorn

from cvforge.api.app import create_app
from cvforge.cli import cli_error, console
from cvforge.core.config import get_port
from cvforge.core.logging_setup import configure_server_logging


def serve_command(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: Optional[int] = typer.Option(
        None, "--port", help="Port to listen on. Defaults to $PORT or 3000.",
    ),
) -> None:
    """Start the CV generation API."""
    try:
        port = port or get_port()
    except RuntimeError as exc:
        cli_error(str(exc))

    log_file = configure_server_logging()
    console.print(f"Server running on [bold]http://{host}:{port}[/bold]")
    console.print(f"[dim]Logging to {log_file}[/dim]")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")
