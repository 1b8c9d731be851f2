"""Application entrypoint."""

from __future__ import annotations

import typer
import uvicorn

from cluster_console.api.app import create_app
from cluster_console.api.dependencies.services import create_cluster_api
from cluster_console.config import get_settings
from cluster_console.console.shell import create_shell
from cluster_console.infrastructure.messaging.event_publisher import (
    InMemoryEventPublisher,
    register_metrics_handlers,
)
from cluster_console.infrastructure.observability.logging import setup_logging
from cluster_console.infrastructure.observability.tracing import setup_tracing


cli = typer.Typer(help="Blueprint-driven cluster provisioning console")


@cli.command("shell")
def shell(
    simulate: bool = typer.Option(False, "--simulate", help="Use the in-memory cluster API"),
) -> None:
    """Start the interactive console."""
    settings = get_settings()
    setup_logging(settings.observability.log_level, settings.observability.json_logs)
    setup_tracing(settings.observability)

    if simulate:
        settings.console.simulate = True
    publisher = InMemoryEventPublisher()
    if settings.observability.metrics_enabled:
        register_metrics_handlers(publisher)

    create_shell(settings, create_cluster_api(settings), publisher).run()


@cli.command("serve")
def serve() -> None:
    """Run the HTTP session API."""
    settings = get_settings()
    setup_logging(settings.observability.log_level, json_logs=True)
    setup_tracing(settings.observability)

    uvicorn.run(
        create_app(settings),
        host=settings.api.host,
        port=settings.api.port,
        reload=False,
        log_level=settings.observability.log_level.lower(),
    )


def main() -> None:
    """Run the command line interface."""
    cli()


if __name__ == "__main__":
    main()
