"""Console command definitions."""

from __future__ import annotations

from collections.abc import Callable
from typing import TextIO

import structlog

from cluster_console.console.progress import ServiceProgress, show_progress
from cluster_console.console.registry import CommandRegistry, Option
from cluster_console.domain.ports.services import ClusterManagementApi, RemoteOperationError
from cluster_console.domain.services.provisioning_service import ProvisioningOrchestrator
from cluster_console.domain.services.service_operations import ServiceOperations


logger = structlog.get_logger(__name__)


def build_registry(
    orchestrator: ProvisioningOrchestrator,
    services: ServiceOperations,
    api: ClusterManagementApi,
    progress_stream: TextIO | None = None,
    progress_interval: float = 1.0,
    progress_max_frames: int | None = None,
) -> CommandRegistry:
    """Register every console command against one operator session."""
    registry = CommandRegistry()
    context = orchestrator.context

    def not_connected() -> bool:
        return not context.is_connected_to_cluster()

    def on_blueprint() -> bool:
        return context.is_focus_on_blueprint()

    def connected() -> bool:
        return context.is_connected_to_cluster()

    def help_text() -> str:
        lines = [f"{c.name:<22}{c.help}" for c in registry.available_commands()]
        return "\n".join(lines)

    def waiter(progress: ServiceProgress) -> Callable[[], None] | None:
        if progress_stream is None:
            return None

        def wait() -> None:
            try:
                show_progress(
                    progress,
                    progress_stream,
                    interval=progress_interval,
                    max_frames=progress_max_frames,
                )
            except KeyboardInterrupt:
                # Ctrl-C abandons the wait, not the console
                progress_stream.write("\n")
                logger.info("progress_interrupted")

        return wait

    def start_services() -> str:
        return services.start_services(
            waiter(ServiceProgress.starting(lambda: _done(api.services_started)))
        )

    def stop_services() -> str:
        return services.stop_services(
            waiter(ServiceProgress.stopping(lambda: _done(api.services_stopped)))
        )

    registry.register("help", "Lists the commands available in this context", help_text)
    registry.register("hint", "Shows some hints", context.get_hint)
    registry.register("hosts list", "Lists the hosts known to the server", services.host_list)

    registry.register(
        "cluster build",
        "Starts to build a cluster from a blueprint",
        lambda blueprint: orchestrator.select_blueprint(blueprint).message,
        available=not_connected,
        options=(Option("blueprint", "Id of the blueprint", mandatory=True),),
    )
    registry.register(
        "cluster assign",
        "Assigns a host to a host group",
        lambda host, group: orchestrator.assign(host, group).message,
        available=on_blueprint,
        options=(
            Option("host", "Fully qualified host name", mandatory=True),
            Option("hostGroup", "Name of the host group", mandatory=True, dest="group"),
        ),
    )
    registry.register(
        "cluster preview",
        "Shows the staged host group assignments",
        lambda: orchestrator.preview().message,
        available=on_blueprint,
    )
    registry.register(
        "cluster create",
        "Creates the cluster from the staged assignments",
        lambda: orchestrator.create_cluster().message,
        available=on_blueprint,
    )
    registry.register(
        "cluster reset",
        "Clears the blueprint focus and the staged assignments",
        lambda: orchestrator.reset().message,
        available=on_blueprint,
    )
    registry.register(
        "cluster delete",
        "Deletes the cluster",
        lambda: orchestrator.delete_cluster().message,
        available=connected,
    )

    registry.register("services list", "Lists the available services", services.services_list,
                      available=connected)
    registry.register("services components", "Lists all services with their components",
                      services.service_components, available=connected)
    registry.register("services start", "Starts all the services", start_services,
                      available=connected)
    registry.register("services stop", "Stops all the running services", stop_services,
                      available=connected)
    registry.register(
        "tasks",
        "Lists the tasks of a request",
        lambda request_id: services.tasks(request_id),
        available=connected,
        options=(Option("id", "Id of the request", default="1", dest="request_id"),),
    )

    registry.register("debug on", "Shows the URL of the API calls", services.debug_on,
                      available=lambda: not services.debug_enabled)
    registry.register("debug off", "Stops showing the URL of the API calls", services.debug_off,
                      available=lambda: services.debug_enabled)
    return registry


def _done(check: Callable[[], bool]) -> bool:
    try:
        return check()
    except RemoteOperationError:
        return True
