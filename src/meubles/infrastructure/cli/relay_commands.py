"""CLI command that serves the notification relay."""

from __future__ import annotations

import click
import uvicorn

from meubles.infrastructure import bootstrap
from meubles.infrastructure.cli.runtime import settings


@click.command("serve")
@click.option("--host", default="0.0.0.0", help="Interface to bind.")
@click.option("--port", default=None, type=int, help="Port (defaults to RELAY_PORT).")
def relay_serve(host: str, port: int | None) -> None:
    """Serve POST /send-order, forwarding notifications to Brevo."""
    config = settings()
    if not config.brevo_api_key:
        click.echo("WARNING: BREVO_API_KEY is not set; notifications will fail.", err=True)
    uvicorn.run(bootstrap.relay_app(config), host=host, port=port or config.relay_port)
