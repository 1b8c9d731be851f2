"""Domain events package."""

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


__all__ = [
    "AssignmentRejected",
    "BlueprintSelected",
    "ClusterCreated",
    "ClusterCreationFailed",
    "ClusterDeleted",
    "ClusterDeletionFailed",
    "ClusterRollbackAttempted",
    "HostAssigned",
]
