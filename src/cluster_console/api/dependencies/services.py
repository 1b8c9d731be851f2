"""Service dependencies for FastAPI dependency injection."""

from __future__ import annotations

from starlette.requests import Request

from cluster_console.config import get_settings, Settings
from cluster_console.domain.ports.services import ClusterManagementApi, EventPublisher
from cluster_console.infrastructure.ambari.rest_client import AmbariRestClient
from cluster_console.infrastructure.ambari.simulated import SimulatedClusterApi
from cluster_console.infrastructure.messaging.event_publisher import (
    InMemoryEventPublisher,
    register_metrics_handlers,
)
from cluster_console.infrastructure.session.registry import SessionRegistry


def create_cluster_api(settings: Settings) -> ClusterManagementApi:
    """Pick the simulated or the REST adapter."""
    if settings.console.simulate:
        return SimulatedClusterApi()
    return AmbariRestClient(settings.ambari)


class ServiceContainer:
    """Simple dependency injection container.

    Implements the Composition Root pattern for assembling
    dependencies and managing their lifecycle.
    """

    _instance: ServiceContainer | None = None

    def __init__(
        self,
        settings: Settings | None = None,
        cluster_api: ClusterManagementApi | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._cluster_api = cluster_api or create_cluster_api(self._settings)
        self._event_publisher = InMemoryEventPublisher()
        if self._settings.observability.metrics_enabled:
            register_metrics_handlers(self._event_publisher)
        self._sessions = SessionRegistry(self._cluster_api, self._event_publisher)

    @classmethod
    def get_instance(cls, settings: Settings | None = None) -> ServiceContainer:
        """Shared container, built from ``settings`` on first use."""
        if cls._instance is None:
            cls._instance = cls(settings)
        return cls._instance

    @classmethod
    def install(cls, container: ServiceContainer) -> None:
        cls._instance = container

    @classmethod
    def reset(cls) -> None:
        cls._instance = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def cluster_api(self) -> ClusterManagementApi:
        return self._cluster_api

    @property
    def event_publisher(self) -> EventPublisher:
        return self._event_publisher

    @property
    def sessions(self) -> SessionRegistry:
        return self._sessions


def get_service_container(request: Request) -> ServiceContainer:
    """Container for the app handling ``request``, wired from that app's settings."""
    return ServiceContainer.get_instance(getattr(request.app.state, "settings", None))
