"""Server CLI commands."""

import typer
from rich.panel import Panel

from library_catalog.runtime.context import get_config

from .utils import console


def serve(
    host: str | None = typer.Option(None, help="Host to bind the server to"),
    port: int | None = typer.Option(None, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    🚀 Start the catalog API server.

    Host and port default to the values of the active configuration.
    """
    import uvicorn

    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port

    console.print(
        Panel.fit(
            f"[bold green]Starting Library Catalog on {bind_host}:{bind_port}[/bold green]\n"
            f"Environment: [cyan]{config.app.environment}[/cyan]",
            border_style="green",
        )
    )

    uvicorn.run(
        "library_catalog.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=log_level,
        access_log=False,  # We handle access logging in middleware
    )
