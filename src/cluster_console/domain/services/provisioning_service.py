"""Domain service driving blueprint selection, host assignment and cluster lifecycle."""

from __future__ import annotations

import structlog

from cluster_console.domain.events.cluster_events import (
    AssignmentRejected,
    BlueprintSelected,
    ClusterCreated,
    ClusterCreationFailed,
    ClusterDeleted,
    ClusterDeletionFailed,
    ClusterRollbackAttempted,
    HostAssigned,
)
from cluster_console.domain.models.assignment import (
    AssignmentError,
    AssignmentStore,
    InvalidHostGroupError,
)
from cluster_console.domain.models.base import DomainEvent
from cluster_console.domain.models.blueprint import Blueprint, HostGroupTemplate
from cluster_console.domain.models.outcome import OutcomeKind, ProvisioningOutcome
from cluster_console.domain.models.session import ConsoleSession, SessionContext
from cluster_console.domain.ports.services import (
    ClusterManagementApi,
    EventPublisher,
    RemoteOperationError,
)
from cluster_console.rendering import render_multi_value_map, render_single_map


logger = structlog.get_logger(__name__)


class ProvisioningOrchestrator:
    """Stages host assignments for a blueprint and creates or deletes the cluster.

    One orchestrator works on exactly one ``ConsoleSession``. Every public
    operation returns a ``ProvisioningOutcome``; remote failures never escape
    as exceptions. A failed create is always followed by a single
    compensating delete of the same cluster name.
    """

    def __init__(
        self,
        api: ClusterManagementApi,
        session: ConsoleSession,
        event_publisher: EventPublisher | None = None,
    ) -> None:
        self._api = api
        self._session = session
        self._event_publisher = event_publisher

    @property
    def session(self) -> ConsoleSession:
        return self._session

    @property
    def context(self) -> SessionContext:
        return self._session.context

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _publish(self, event: DomainEvent) -> None:
        if self._event_publisher is not None:
            self._event_publisher.publish(event.event_type, event.to_payload())

    def _services_table(self) -> str:
        try:
            return render_single_map(self._api.services(), "SERVICE", "STATE")
        except RemoteOperationError as e:
            logger.warning("services_query_failed", error=e.message)
            return ""

    @staticmethod
    def _with_services(message: str, services: str) -> str:
        return f"{message}\n\n{services}" if services else message

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def _existing_cluster(self) -> str:
        try:
            return self._api.active_cluster_name()
        except RemoteOperationError as e:
            logger.debug("no_active_cluster", error=e.message)
            return ""

    def detect_cluster(self) -> str:
        """Connect the session to the cluster the server already runs, if any.

        Returns the cluster name, or "" when no cluster is installed or the
        server cannot tell.
        """
        cluster_name = self._existing_cluster()
        if cluster_name:
            self.context.connect_cluster(cluster_name)
            logger.info("existing_cluster_detected", cluster_name=cluster_name)
        return cluster_name

    def select_blueprint(self, blueprint_id: str) -> ProvisioningOutcome:
        """Put a blueprint in focus and seed the assignment store from it."""
        if self.context.is_connected_to_cluster():
            return ProvisioningOutcome.failed(
                f"Already connected to cluster {self.context.get_cluster()}",
                OutcomeKind.PRECONDITION,
            )
        try:
            exists = self._api.blueprint_exists(blueprint_id)
        except RemoteOperationError as e:
            logger.warning("blueprint_lookup_failed", blueprint_id=blueprint_id, error=e.message)
            return ProvisioningOutcome.failed(
                f"Could not select blueprint: {e.message}", OutcomeKind.REMOTE_ERROR
            )

        if not exists:
            logger.info("blueprint_not_found", blueprint_id=blueprint_id)
            return ProvisioningOutcome.failed(
                f"Blueprint {blueprint_id} does not exist", OutcomeKind.NOT_FOUND
            )

        try:
            blueprint = Blueprint(
                blueprint_id=blueprint_id,
                host_groups=self._api.blueprint_topology(blueprint_id),
            )
            template = HostGroupTemplate(
                blueprint_id=blueprint_id,
                groups=self._api.host_group_template(blueprint_id),
            )
            host_names = self._api.host_names()
        except RemoteOperationError as e:
            logger.warning("blueprint_fetch_failed", blueprint_id=blueprint_id, error=e.message)
            return ProvisioningOutcome.failed(
                f"Could not select blueprint: {e.message}", OutcomeKind.REMOTE_ERROR
            )

        self._session.replace_assignments(AssignmentStore.from_template(template, host_names))
        self.context.set_blueprint_focus(blueprint_id)
        self._publish(BlueprintSelected(
            blueprint_id=blueprint_id,
            host_groups=list(template.groups),
            session_id=self._session.id,
        ))

        logger.info(
            "blueprint_selected",
            blueprint_id=blueprint_id,
            host_groups=blueprint.group_names,
            known_hosts=len(host_names),
        )
        return ProvisioningOutcome.ok(
            render_multi_value_map(blueprint.host_groups, "HOSTGROUP", "COMPONENT")
        )

    def assign(self, host: str, group: str) -> ProvisioningOutcome:
        """Append a host to one of the focused blueprint's host groups."""
        store = self._session.assignments
        try:
            if store is None:
                raise InvalidHostGroupError(group)
            store.assign(host, group)
        except AssignmentError as e:
            self._publish(AssignmentRejected(
                host=host, host_group=group, reason=e.message, session_id=self._session.id,
            ))
            logger.info("assignment_rejected", host=host, host_group=group, reason=e.message)
            return ProvisioningOutcome.failed(e.message, OutcomeKind.INVALID_ASSIGNMENT)

        self._publish(HostAssigned(host=host, host_group=group, session_id=self._session.id))
        logger.info("host_assigned", host=host, host_group=group)
        return ProvisioningOutcome.ok(f"{host} has been added to {group}")

    def preview(self) -> ProvisioningOutcome:
        """Render the staged assignments."""
        store = self._session.assignments
        host_groups = store.host_groups if store is not None else {}
        return ProvisioningOutcome.ok(render_multi_value_map(host_groups, "HOSTGROUP", "HOST"))

    def reset(self) -> ProvisioningOutcome:
        """Drop the focused blueprint and its staged assignments."""
        self.context.reset_focus()
        self._session.discard_assignments()
        logger.info("focus_reset", session_id=self._session.id)
        return ProvisioningOutcome.ok("Blueprint focus and host assignments have been reset")

    def create_cluster(self) -> ProvisioningOutcome:
        """Create the cluster, deleting it again if creation fails."""
        blueprint_id = self.context.get_focus_value()
        if not blueprint_id:
            return ProvisioningOutcome.failed("No blueprint in focus", OutcomeKind.PRECONDITION)

        # the compensating delete must never reach a cluster this session did not create
        existing = self._existing_cluster()
        if existing:
            logger.warning("cluster_already_installed", cluster_name=existing)
            return ProvisioningOutcome.failed(
                f"Cluster {existing} already exists", OutcomeKind.PRECONDITION
            )

        store = self._session.assignments
        host_groups = store.snapshot() if store is not None else {}

        result = self._api.create_cluster(blueprint_id, blueprint_id, host_groups)
        if not result.success:
            return self._roll_back(blueprint_id, result.message)

        try:
            cluster_name = self._api.active_cluster_name() or blueprint_id
        except RemoteOperationError as e:
            logger.warning("cluster_name_query_failed", error=e.message)
            cluster_name = blueprint_id

        self.context.connect_cluster(cluster_name)
        self.context.reset_focus()
        self._session.discard_assignments()
        self._publish(ClusterCreated(
            blueprint_id=blueprint_id, cluster_name=cluster_name, session_id=self._session.id,
        ))

        logger.info("cluster_created", blueprint_id=blueprint_id, cluster_name=cluster_name)
        return ProvisioningOutcome.ok(
            self._with_services("Successfully created the cluster", self._services_table())
        )

    def _roll_back(self, blueprint_id: str, error: str) -> ProvisioningOutcome:
        self._publish(ClusterCreationFailed(
            blueprint_id=blueprint_id, error_message=error, session_id=self._session.id,
        ))
        logger.error("cluster_create_failed", blueprint_id=blueprint_id, error=error)

        cleanup = self._api.delete_cluster(blueprint_id)
        self._publish(ClusterRollbackAttempted(
            cluster_name=blueprint_id,
            success=cleanup.success,
            error_message=cleanup.message if not cleanup.success else "",
            session_id=self._session.id,
        ))
        logger.info(
            "cluster_rollback_attempted",
            cluster_name=blueprint_id,
            success=cleanup.success,
            error=cleanup.message,
        )

        try:
            template = HostGroupTemplate(
                blueprint_id=blueprint_id,
                groups=self._api.host_group_template(blueprint_id),
            )
        except RemoteOperationError as e:
            logger.warning("host_group_reseed_failed", blueprint_id=blueprint_id, error=e.message)
            self._session.discard_assignments()
        else:
            previous = self._session.assignments
            host_names = previous.host_names if previous is not None else []
            self._session.replace_assignments(AssignmentStore.from_template(template, host_names))

        return ProvisioningOutcome.failed(
            self._with_services(f"Failed to create the cluster: {error}", self._services_table()),
            OutcomeKind.REMOTE_ERROR,
        )

    def delete_cluster(self) -> ProvisioningOutcome:
        """Delete the cluster the session is connected to."""
        if not self.context.is_connected_to_cluster():
            return ProvisioningOutcome.failed("No cluster is connected", OutcomeKind.PRECONDITION)

        cluster_name = self.context.get_cluster()
        result = self._api.delete_cluster(cluster_name)
        if not result.success:
            self._publish(ClusterDeletionFailed(
                cluster_name=cluster_name,
                error_message=result.message,
                session_id=self._session.id,
            ))
            logger.error("cluster_delete_failed", cluster_name=cluster_name, error=result.message)
            return ProvisioningOutcome.failed(
                f"Could not delete the cluster: {result.message}", OutcomeKind.REMOTE_ERROR
            )

        self._publish(ClusterDeleted(cluster_name=cluster_name, session_id=self._session.id))
        logger.info("cluster_deleted", cluster_name=cluster_name)
        return ProvisioningOutcome.ok("Successfully deleted the cluster")
