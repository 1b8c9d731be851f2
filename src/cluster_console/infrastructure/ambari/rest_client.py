"""REST adapter for the Ambari cluster management API."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

import requests
import structlog
from requests.exceptions import ConnectionError, RequestException, Timeout

from cluster_console.config import AmbariSettings
from cluster_console.domain.models.outcome import RemoteResult
from cluster_console.domain.ports.services import ClusterManagementApi, RemoteOperationError
from cluster_console.infrastructure.observability.metrics import (
    REMOTE_REQUEST_DURATION,
    REMOTE_REQUESTS_TOTAL,
)
from cluster_console.infrastructure.observability.tracing import remote_call_span


logger = structlog.get_logger(__name__)

STATE_STARTED = "STARTED"
STATE_STOPPED = "INSTALLED"

T = TypeVar("T")


def _parsed(what: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Report a reply of the wrong shape as a remote failure."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except (KeyError, IndexError, TypeError, AttributeError) as e:
                raise RemoteOperationError(f"Malformed {what} response: {e!r}") from e

        return wrapper

    return decorator


class AmbariRestClient(ClusterManagementApi):
    """Cluster management API client speaking Ambari's REST v1 dialect.

    Every HTTP failure, connection problem or timeout is converted into a
    ``RemoteOperationError`` carrying the server's message. Mutating calls
    catch that error and return a failed ``RemoteResult`` instead.
    """

    def __init__(
        self, settings: AmbariSettings, session: requests.Session | None = None
    ) -> None:
        self._settings = settings
        self._base_url = settings.base_url
        self._session = session or requests.Session()
        self._session.auth = (settings.user, settings.password)
        self._session.verify = settings.verify_tls
        self._session.headers.update({
            "Accept": "application/json",
            "X-Requested-By": "cluster-console",
        })
        self._debug = False

    @property
    def debug_enabled(self) -> bool:
        return self._debug

    @debug_enabled.setter
    def debug_enabled(self, enabled: bool) -> None:
        self._debug = enabled

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        body: dict[str, Any] | None = None,
        allow_missing: bool = False,
    ) -> dict[str, Any] | None:
        """Send a request and decode the JSON body.

        Returns None for a 404 when ``allow_missing`` is set.
        """
        url = f"{self._base_url}{path}"
        if self._debug:
            logger.info("ambari_request", method=method, url=url, params=params)

        started = time.perf_counter()
        with remote_call_span(method, path) as span:
            try:
                response = self._session.request(
                    method=method,
                    url=url,
                    params=params,
                    json=body,
                    timeout=self._settings.timeout,
                )
            except ConnectionError as e:
                REMOTE_REQUESTS_TOTAL.labels(method=method, status="connection_error").inc()
                raise RemoteOperationError(
                    f"Cannot connect to {self._settings.host}:{self._settings.port}: {e}"
                ) from e
            except Timeout as e:
                REMOTE_REQUESTS_TOTAL.labels(method=method, status="timeout").inc()
                raise RemoteOperationError(
                    f"Request timed out after {self._settings.timeout}s"
                ) from e
            except RequestException as e:
                REMOTE_REQUESTS_TOTAL.labels(method=method, status="error").inc()
                raise RemoteOperationError(f"Request failed: {e}") from e
            finally:
                REMOTE_REQUEST_DURATION.labels(method=method).observe(
                    time.perf_counter() - started
                )
            span.set_attribute("http.status_code", response.status_code)

        REMOTE_REQUESTS_TOTAL.labels(method=method, status=str(response.status_code)).inc()

        if response.status_code == 404 and allow_missing:
            return None

        if response.status_code >= 400:
            raise RemoteOperationError(_error_message(response), response.status_code)

        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError:
            return {"raw": response.text}
        if not isinstance(data, dict):
            raise RemoteOperationError(
                f"Unexpected response from {method} {path}: expected a JSON object"
            )
        return data

    def _get(self, path: str, **kwargs: Any) -> dict[str, Any]:
        return self._request("GET", path, **kwargs) or {}

    def _command(self, method: str, path: str, body: dict[str, Any] | None = None) -> RemoteResult:
        try:
            self._request(method, path, body=body)
        except RemoteOperationError as e:
            return RemoteResult.failed(e.message)
        return RemoteResult.ok()

    def _cluster_path(self) -> str:
        return f"/clusters/{self.active_cluster_name()}"

    # ------------------------------------------------------------------
    # Blueprints and hosts
    # ------------------------------------------------------------------

    def _blueprint(self, blueprint_id: str) -> dict[str, Any]:
        data = self._request("GET", f"/blueprints/{blueprint_id}", allow_missing=True)
        if data is None:
            raise RemoteOperationError(f"Blueprint {blueprint_id} not found", 404)
        return data

    def blueprint_exists(self, blueprint_id: str) -> bool:
        return self._request("GET", f"/blueprints/{blueprint_id}", allow_missing=True) is not None

    @_parsed("blueprint")
    def blueprint_topology(self, blueprint_id: str) -> dict[str, list[str]]:
        data = self._blueprint(blueprint_id)
        return {
            group["name"]: [component["name"] for component in group.get("components", [])]
            for group in data.get("host_groups", [])
        }

    @_parsed("blueprint")
    def host_group_template(self, blueprint_id: str) -> dict[str, list[str]]:
        data = self._blueprint(blueprint_id)
        return {group["name"]: [] for group in data.get("host_groups", [])}

    @_parsed("hosts")
    def host_statuses(self) -> dict[str, str]:
        data = self._get("/hosts", params={"fields": "Hosts/host_status"})
        return {
            item["Hosts"]["host_name"]: item["Hosts"].get("host_status", "UNKNOWN")
            for item in data.get("items", [])
        }

    def host_names(self) -> list[str]:
        return list(self.host_statuses())

    # ------------------------------------------------------------------
    # Cluster lifecycle
    # ------------------------------------------------------------------

    def create_cluster(
        self, blueprint_id: str, cluster_name: str, host_groups: dict[str, list[str]]
    ) -> RemoteResult:
        body = {
            "blueprint": blueprint_id,
            "host_groups": [
                {"name": group, "hosts": [{"fqdn": host} for host in hosts]}
                for group, hosts in host_groups.items()
            ],
        }
        logger.info("ambari_create_cluster", blueprint_id=blueprint_id, cluster_name=cluster_name)
        return self._command("POST", f"/clusters/{cluster_name}", body)

    def delete_cluster(self, cluster_name: str) -> RemoteResult:
        logger.info("ambari_delete_cluster", cluster_name=cluster_name)
        return self._command("DELETE", f"/clusters/{cluster_name}")

    @_parsed("clusters")
    def active_cluster_name(self) -> str:
        items = self._get("/clusters").get("items", [])
        if not items:
            raise RemoteOperationError("No cluster is installed")
        return items[0]["Clusters"]["cluster_name"]

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    @_parsed("services")
    def services(self) -> dict[str, str]:
        data = self._get(f"{self._cluster_path()}/services", params={"fields": "ServiceInfo/state"})
        return {
            item["ServiceInfo"]["service_name"]: item["ServiceInfo"].get("state", "UNKNOWN")
            for item in data.get("items", [])
        }

    @_parsed("service components")
    def service_components(self) -> dict[str, dict[str, str]]:
        data = self._get(
            f"{self._cluster_path()}/services",
            params={"fields": "components/ServiceComponentInfo/state"},
        )
        result: dict[str, dict[str, str]] = {}
        for item in data.get("items", []):
            service = item["ServiceInfo"]["service_name"]
            result[service] = {
                component["ServiceComponentInfo"]["component_name"]:
                    component["ServiceComponentInfo"].get("state", "UNKNOWN")
                for component in item.get("components", [])
            }
        return result

    @_parsed("tasks")
    def tasks(self, request_id: str) -> dict[str, str]:
        data = self._get(
            f"{self._cluster_path()}/requests/{request_id}/tasks",
            params={"fields": "Tasks/command_detail,Tasks/status"},
        )
        return {
            item["Tasks"]["command_detail"]: item["Tasks"]["status"]
            for item in data.get("items", [])
        }

    def _set_service_state(self, state: str, context: str) -> RemoteResult:
        try:
            path = f"{self._cluster_path()}/services"
        except RemoteOperationError as e:
            return RemoteResult.failed(e.message)
        body = {
            "RequestInfo": {"context": context},
            "Body": {"ServiceInfo": {"state": state}},
        }
        return self._command("PUT", path, body)

    def start_all_services(self) -> RemoteResult:
        return self._set_service_state(STATE_STARTED, "Start All Services")

    def stop_all_services(self) -> RemoteResult:
        return self._set_service_state(STATE_STOPPED, "Stop All Services")

    def services_started(self) -> bool:
        return all(state == STATE_STARTED for state in self.services().values())

    def services_stopped(self) -> bool:
        return all(state == STATE_STOPPED for state in self.services().values())


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return f"HTTP {response.status_code}"
