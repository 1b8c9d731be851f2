"""Shared test fixtures."""

from __future__ import annotations

import pytest

from cluster_console.api.dependencies.services import ServiceContainer
from cluster_console.config import Environment, Settings
from cluster_console.domain.models.assignment import AssignmentStore
from cluster_console.domain.models.blueprint import HostGroupTemplate
from cluster_console.domain.models.session import ConsoleSession
from cluster_console.infrastructure.ambari.simulated import SimulatedClusterApi
from cluster_console.infrastructure.messaging.event_publisher import InMemoryEventPublisher


@pytest.fixture(autouse=True)
def reset_container() -> None:
    """Drop the shared service container before each test."""
    ServiceContainer.reset()


@pytest.fixture
def settings() -> Settings:
    return Settings(environment=Environment.TESTING, debug=True)


@pytest.fixture
def simulated_api() -> SimulatedClusterApi:
    return SimulatedClusterApi(
        blueprints={
            "bp": {
                "master": ["NAMENODE", "RESOURCEMANAGER"],
                "worker": ["DATANODE", "NODEMANAGER"],
            },
        },
        hosts={"host1": "HEALTHY", "host2": "HEALTHY", "host3": "HEALTHY"},
    )


@pytest.fixture
def event_publisher() -> InMemoryEventPublisher:
    return InMemoryEventPublisher()


@pytest.fixture
def console_session() -> ConsoleSession:
    return ConsoleSession.open(operator="tester")


@pytest.fixture
def sample_template() -> HostGroupTemplate:
    return HostGroupTemplate(blueprint_id="bp", groups={"group1": []})


@pytest.fixture
def sample_store(sample_template: HostGroupTemplate) -> AssignmentStore:
    return AssignmentStore.from_template(sample_template, ["host3"])
