"""Domain service for inspecting and controlling the services of a connected cluster."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from cluster_console.domain.ports.services import ClusterManagementApi, RemoteOperationError
from cluster_console.rendering import render_map_value_map, render_single_map


logger = structlog.get_logger(__name__)

Waiter = Callable[[], None]


class ServiceOperations:
    """Read-mostly operations available once a cluster is connected."""

    def __init__(self, api: ClusterManagementApi) -> None:
        self._api = api

    def services_list(self) -> str:
        try:
            return render_single_map(self._api.services(), "SERVICE", "STATE")
        except RemoteOperationError as e:
            return f"Could not list services: {e.message}"

    def service_components(self) -> str:
        try:
            components = self._api.service_components()
        except RemoteOperationError as e:
            return f"Could not list service components: {e.message}"
        return render_map_value_map(components, "SERVICE", "COMPONENT", "STATE")

    def tasks(self, request_id: str = "1") -> str:
        try:
            return render_single_map(self._api.tasks(request_id), "TASK", "STATUS")
        except RemoteOperationError as e:
            return f"Could not list tasks of request {request_id}: {e.message}"

    def host_list(self) -> str:
        try:
            return render_single_map(self._api.host_statuses(), "HOST", "STATUS")
        except RemoteOperationError as e:
            return f"Could not list hosts: {e.message}"

    def start_services(self, wait: Waiter | None = None) -> str:
        """Request STARTED for every service.

        ``wait`` runs after an accepted request and before the services
        table is read, so the table shows the state that was waited for.
        """
        result = self._api.start_all_services()
        if result.success:
            message = "Starting all services.."
            if wait is not None:
                wait()
        else:
            logger.warning("services_start_failed", error=result.message)
            message = "Cannot start services"
        return f"{message}\n\n{self.services_list()}"

    def stop_services(self, wait: Waiter | None = None) -> str:
        result = self._api.stop_all_services()
        if result.success:
            message = "Stopping all services.."
            if wait is not None:
                wait()
        else:
            logger.warning("services_stop_failed", error=result.message)
            message = "Cannot stop services"
        return f"{message}\n\n{self.services_list()}"

    def debug_on(self) -> str:
        self._api.debug_enabled = True
        return "debug enabled"

    def debug_off(self) -> str:
        self._api.debug_enabled = False
        return "debug disabled"

    @property
    def debug_enabled(self) -> bool:
        return self._api.debug_enabled
