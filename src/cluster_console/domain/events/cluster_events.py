"""Cluster provisioning domain events."""

from __future__ import annotations

from cluster_console.domain.models.base import DomainEvent


class BlueprintSelected(DomainEvent):
    """Emitted when a blueprint is put in focus and the store is seeded."""

    blueprint_id: str
    host_groups: list[str]
    event_type: str = "blueprint.selected"


class HostAssigned(DomainEvent):
    """Emitted when a host is appended to a host group."""

    host: str
    host_group: str
    event_type: str = "host.assigned"


class AssignmentRejected(DomainEvent):
    """Emitted when an assignment fails validation."""

    host: str
    host_group: str
    reason: str
    event_type: str = "host.assignment_rejected"


class ClusterCreated(DomainEvent):
    """Emitted when the cluster was created from the staged assignments."""

    blueprint_id: str
    cluster_name: str
    event_type: str = "cluster.created"


class ClusterCreationFailed(DomainEvent):
    """Emitted when the remote create call fails."""

    blueprint_id: str
    error_message: str
    event_type: str = "cluster.creation_failed"


class ClusterRollbackAttempted(DomainEvent):
    """Emitted after the compensating delete of a failed create."""

    cluster_name: str
    success: bool
    error_message: str = ""
    event_type: str = "cluster.rollback_attempted"


class ClusterDeleted(DomainEvent):
    """Emitted when the active cluster was deleted."""

    cluster_name: str
    event_type: str = "cluster.deleted"


class ClusterDeletionFailed(DomainEvent):
    """Emitted when deleting the active cluster fails."""

    cluster_name: str
    error_message: str
    event_type: str = "cluster.deletion_failed"
