"""Simulated cluster management API for development and testing."""

from __future__ import annotations

import structlog

from cluster_console.domain.models.outcome import RemoteResult
from cluster_console.domain.ports.services import ClusterManagementApi, RemoteOperationError


logger = structlog.get_logger(__name__)

DEFAULT_BLUEPRINTS: dict[str, dict[str, list[str]]] = {
    "single-node-hdfs-yarn": {
        "host_group_1": [
            "NAMENODE", "SECONDARY_NAMENODE", "DATANODE",
            "RESOURCEMANAGER", "NODEMANAGER", "HISTORYSERVER",
        ],
    },
    "multi-node-hdfs-yarn": {
        "master": ["NAMENODE", "SECONDARY_NAMENODE", "RESOURCEMANAGER", "HISTORYSERVER"],
        "slave_1": ["DATANODE", "NODEMANAGER"],
    },
}

DEFAULT_HOSTS: dict[str, str] = {
    "node1.example.com": "HEALTHY",
    "node2.example.com": "HEALTHY",
    "node3.example.com": "HEALTHY",
}

# component -> owning service
COMPONENT_SERVICES: dict[str, str] = {
    "NAMENODE": "HDFS",
    "SECONDARY_NAMENODE": "HDFS",
    "DATANODE": "HDFS",
    "RESOURCEMANAGER": "YARN",
    "NODEMANAGER": "YARN",
    "HISTORYSERVER": "MAPREDUCE2",
}


class SimulatedClusterApi(ClusterManagementApi):
    """In-memory stand-in for the cluster management server.

    Creating a cluster installs the services of its blueprint in the
    INSTALLED state; starting and stopping flip every service at once.
    ``fail_create`` and ``fail_delete`` inject remote failures.
    """

    def __init__(
        self,
        blueprints: dict[str, dict[str, list[str]]] | None = None,
        hosts: dict[str, str] | None = None,
        fail_create: str = "",
        fail_delete: str = "",
    ) -> None:
        self._blueprints = dict(DEFAULT_BLUEPRINTS if blueprints is None else blueprints)
        self._hosts = dict(DEFAULT_HOSTS if hosts is None else hosts)
        self.fail_create = fail_create
        self.fail_delete = fail_delete
        self._cluster_name = ""
        self._cluster_blueprint = ""
        self._assignments: dict[str, list[str]] = {}
        self._service_states: dict[str, str] = {}
        self._debug = False

    @property
    def debug_enabled(self) -> bool:
        return self._debug

    @debug_enabled.setter
    def debug_enabled(self, enabled: bool) -> None:
        self._debug = enabled

    @property
    def cluster_assignments(self) -> dict[str, list[str]]:
        return {group: list(hosts) for group, hosts in self._assignments.items()}

    def _require_cluster(self) -> None:
        if not self._cluster_name:
            raise RemoteOperationError("No cluster is installed")

    def blueprint_exists(self, blueprint_id: str) -> bool:
        return blueprint_id in self._blueprints

    def _blueprint(self, blueprint_id: str) -> dict[str, list[str]]:
        if blueprint_id not in self._blueprints:
            raise RemoteOperationError(f"Blueprint {blueprint_id} not found", 404)
        return self._blueprints[blueprint_id]

    def blueprint_topology(self, blueprint_id: str) -> dict[str, list[str]]:
        return {group: list(components) for group, components in self._blueprint(blueprint_id).items()}

    def host_group_template(self, blueprint_id: str) -> dict[str, list[str]]:
        return {group: [] for group in self._blueprint(blueprint_id)}

    def host_names(self) -> list[str]:
        return list(self._hosts)

    def host_statuses(self) -> dict[str, str]:
        return dict(self._hosts)

    def create_cluster(
        self, blueprint_id: str, cluster_name: str, host_groups: dict[str, list[str]]
    ) -> RemoteResult:
        if self.fail_create:
            return RemoteResult.failed(self.fail_create)
        if self._cluster_name:
            return RemoteResult.failed(f"Cluster {self._cluster_name} already exists")
        if blueprint_id not in self._blueprints:
            return RemoteResult.failed(f"Blueprint {blueprint_id} not found")
        empty = [group for group, hosts in host_groups.items() if not hosts]
        if empty:
            return RemoteResult.failed(f"Host groups without hosts: {', '.join(sorted(empty))}")

        self._cluster_name = cluster_name
        self._cluster_blueprint = blueprint_id
        self._assignments = {group: list(hosts) for group, hosts in host_groups.items()}
        self._service_states = {
            COMPONENT_SERVICES.get(component, component): "INSTALLED"
            for components in self._blueprints[blueprint_id].values()
            for component in components
        }
        logger.info("simulated_cluster_created", cluster_name=cluster_name)
        return RemoteResult.ok()

    def delete_cluster(self, cluster_name: str) -> RemoteResult:
        if self.fail_delete:
            return RemoteResult.failed(self.fail_delete)
        if cluster_name != self._cluster_name:
            return RemoteResult.failed(f"Cluster {cluster_name} not found")
        self._cluster_name = ""
        self._cluster_blueprint = ""
        self._assignments = {}
        self._service_states = {}
        logger.info("simulated_cluster_deleted", cluster_name=cluster_name)
        return RemoteResult.ok()

    def active_cluster_name(self) -> str:
        self._require_cluster()
        return self._cluster_name

    def services(self) -> dict[str, str]:
        self._require_cluster()
        return dict(self._service_states)

    def service_components(self) -> dict[str, dict[str, str]]:
        self._require_cluster()
        result: dict[str, dict[str, str]] = {service: {} for service in self._service_states}
        for components in self._blueprints[self._cluster_blueprint].values():
            for component in components:
                service = COMPONENT_SERVICES.get(component, component)
                result[service][component] = self._service_states[service]
        return result

    def tasks(self, request_id: str) -> dict[str, str]:
        self._require_cluster()
        return {
            f"{component} INSTALL": "COMPLETED"
            for components in self._blueprints[self._cluster_blueprint].values()
            for component in components
        }

    def _set_state(self, state: str) -> RemoteResult:
        if not self._cluster_name:
            return RemoteResult.failed("No cluster is installed")
        self._service_states = {service: state for service in self._service_states}
        return RemoteResult.ok()

    def start_all_services(self) -> RemoteResult:
        return self._set_state("STARTED")

    def stop_all_services(self) -> RemoteResult:
        return self._set_state("INSTALLED")

    def services_started(self) -> bool:
        return all(state == "STARTED" for state in self.services().values())

    def services_stopped(self) -> bool:
        return all(state == "INSTALLED" for state in self.services().values())
