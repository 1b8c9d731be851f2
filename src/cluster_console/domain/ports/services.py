"""Service port interfaces (hexagonal architecture)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from cluster_console.domain.models.outcome import RemoteResult


class RemoteOperationError(Exception):
    """Raised when a call against the cluster management API fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ClusterManagementApi(ABC):
    """Port for the remote cluster management service.

    Query methods raise ``RemoteOperationError``. Mutating methods never
    raise and report failures through ``RemoteResult``.
    """

    @abstractmethod
    def blueprint_exists(self, blueprint_id: str) -> bool:
        """Check whether a blueprint is registered."""

    @abstractmethod
    def blueprint_topology(self, blueprint_id: str) -> dict[str, list[str]]:
        """Host group -> component names of a blueprint."""

    @abstractmethod
    def host_group_template(self, blueprint_id: str) -> dict[str, list[str]]:
        """Host group -> initial host list of a blueprint."""

    @abstractmethod
    def host_names(self) -> list[str]:
        """Hosts registered with the management server."""

    @abstractmethod
    def host_statuses(self) -> dict[str, str]:
        """Host name -> host status."""

    @abstractmethod
    def create_cluster(
        self, blueprint_id: str, cluster_name: str, host_groups: dict[str, list[str]]
    ) -> RemoteResult:
        """Create a cluster from a blueprint and host assignments."""

    @abstractmethod
    def delete_cluster(self, cluster_name: str) -> RemoteResult:
        """Delete a cluster."""

    @abstractmethod
    def active_cluster_name(self) -> str:
        """Name of the cluster managed by the server."""

    @abstractmethod
    def services(self) -> dict[str, str]:
        """Service name -> state."""

    @abstractmethod
    def service_components(self) -> dict[str, dict[str, str]]:
        """Service name -> component name -> state."""

    @abstractmethod
    def tasks(self, request_id: str) -> dict[str, str]:
        """Task detail -> status for a request."""

    @abstractmethod
    def start_all_services(self) -> RemoteResult:
        """Request all services to start."""

    @abstractmethod
    def stop_all_services(self) -> RemoteResult:
        """Request all services to stop."""

    @abstractmethod
    def services_started(self) -> bool:
        """True when every service reports STARTED."""

    @abstractmethod
    def services_stopped(self) -> bool:
        """True when every service reports INSTALLED (stopped)."""

    @property
    @abstractmethod
    def debug_enabled(self) -> bool:
        """Whether request URLs are logged."""

    @debug_enabled.setter
    @abstractmethod
    def debug_enabled(self, enabled: bool) -> None:
        """Toggle logging of request URLs."""


class EventPublisher(ABC):
    """Port for publishing domain events."""

    @abstractmethod
    def publish(self, event_type: str, payload: dict[str, Any]) -> None:
        """Publish an event."""

    @abstractmethod
    def publish_batch(self, events: list[tuple[str, dict[str, Any]]]) -> None:
        """Publish a batch of events."""
