"""Unit tests for the connected-cluster service operations."""

from __future__ import annotations

import pytest

from cluster_console.domain.models.outcome import RemoteResult
from cluster_console.domain.services.service_operations import ServiceOperations
from cluster_console.infrastructure.ambari.simulated import SimulatedClusterApi


@pytest.fixture
def installed_api(simulated_api: SimulatedClusterApi) -> SimulatedClusterApi:
    result = simulated_api.create_cluster(
        "bp", "bp", {"master": ["host1"], "worker": ["host2", "host3"]}
    )
    assert result.success
    return simulated_api


class TestQueries:
    def test_services_list(self, installed_api: SimulatedClusterApi) -> None:
        output = ServiceOperations(installed_api).services_list()

        assert "SERVICE" in output
        assert "HDFS" in output
        assert "YARN" in output
        assert "INSTALLED" in output

    def test_service_components(self, installed_api: SimulatedClusterApi) -> None:
        output = ServiceOperations(installed_api).service_components()

        assert "COMPONENT" in output
        assert "NAMENODE" in output
        assert "NODEMANAGER" in output

    def test_tasks(self, installed_api: SimulatedClusterApi) -> None:
        output = ServiceOperations(installed_api).tasks("7")

        assert "DATANODE INSTALL" in output
        assert "COMPLETED" in output

    def test_host_list(self, simulated_api: SimulatedClusterApi) -> None:
        output = ServiceOperations(simulated_api).host_list()

        assert "host1" in output
        assert "HEALTHY" in output

    def test_remote_errors_become_messages(self, simulated_api: SimulatedClusterApi) -> None:
        operations = ServiceOperations(simulated_api)

        assert operations.services_list() == "Could not list services: No cluster is installed"
        assert operations.service_components().startswith("Could not list service components")
        assert operations.tasks("3") == (
            "Could not list tasks of request 3: No cluster is installed"
        )


class TestStartStop:
    def test_start_services(self, installed_api: SimulatedClusterApi) -> None:
        output = ServiceOperations(installed_api).start_services()

        assert output.startswith("Starting all services..\n\n")
        assert "STARTED" in output
        assert installed_api.services_started()

    def test_stop_services(self, installed_api: SimulatedClusterApi) -> None:
        operations = ServiceOperations(installed_api)
        operations.start_services()

        output = operations.stop_services()

        assert output.startswith("Stopping all services..")
        assert installed_api.services_stopped()

    def test_start_without_cluster(self, simulated_api: SimulatedClusterApi) -> None:
        output = ServiceOperations(simulated_api).start_services()
        assert output.startswith("Cannot start services")

    def test_stop_without_cluster(self, simulated_api: SimulatedClusterApi) -> None:
        output = ServiceOperations(simulated_api).stop_services()
        assert output.startswith("Cannot stop services")


class TestDebug:
    def test_toggle(self, simulated_api: SimulatedClusterApi) -> None:
        operations = ServiceOperations(simulated_api)

        assert operations.debug_on() == "debug enabled"
        assert operations.debug_enabled
        assert simulated_api.debug_enabled

        assert operations.debug_off() == "debug disabled"
        assert not operations.debug_enabled


class DeferredStartApi(SimulatedClusterApi):
    """Accepts the start request; services come up only later."""

    def start_all_services(self) -> RemoteResult:
        return RemoteResult.ok()

    def finish_start(self) -> None:
        super().start_all_services()


class TestWaitBeforeListing:
    def test_table_shows_state_after_wait(self) -> None:
        api = DeferredStartApi(
            blueprints={"bp": {"master": ["NAMENODE"]}}, hosts={"host1": "HEALTHY"}
        )
        api.create_cluster("bp", "bp", {"master": ["host1"]})

        output = ServiceOperations(api).start_services(wait=api.finish_start)

        assert "STARTED" in output
        assert "INSTALLED" not in output

    def test_wait_skipped_when_request_fails(self, simulated_api: SimulatedClusterApi) -> None:
        waits: list[str] = []

        output = ServiceOperations(simulated_api).stop_services(wait=lambda: waits.append("wait"))

        assert output.startswith("Cannot stop services")
        assert waits == []
