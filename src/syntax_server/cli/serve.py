import logging
from typing import Annotated

import typer
from rich.console import Console

console = Console()


def serve(
    host: Annotated[str | None, typer.Option(help="Interface to bind (default: $SYNTAX_SERVER_HOST).")] = None,
    port: Annotated[int | None, typer.Option(help="Port to bind (default: $SYNTAX_SERVER_PORT).")] = None,
    log_level: Annotated[str, typer.Option(help="Python logging level.")] = "info",
) -> None:
    """Start the HTTP API server."""
    import uvicorn

    from syntax_server.api.app import create_app
    from syntax_server.config import Settings

    logging.basicConfig(level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = Settings.from_env()
    app = create_app(settings)
    bind_host = host or settings.host
    bind_port = port or settings.port
    console.print(f"[green]Starting API server on {bind_host}:{bind_port}[/green]")
    uvicorn.run(app, host=bind_host, port=bind_port, log_level=log_level.lower())
