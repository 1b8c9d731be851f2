"""Domain models package."""

from cluster_console.domain.models.assignment import (
    AssignmentError,
    AssignmentStore,
    InvalidHostGroupError,
    UnknownHostError,
)
from cluster_console.domain.models.base import (
    DomainEntity,
    DomainEvent,
    generate_id,
    utc_now,
    ValueObject,
)
from cluster_console.domain.models.blueprint import Blueprint, HostGroupTemplate
from cluster_console.domain.models.outcome import (
    OutcomeKind,
    ProvisioningOutcome,
    RemoteResult,
)
from cluster_console.domain.models.session import (
    ConsoleSession,
    FocusType,
    SessionContext,
)


__all__ = [
    "AssignmentError",
    "AssignmentStore",
    "Blueprint",
    "ConsoleSession",
    "DomainEntity",
    "DomainEvent",
    "FocusType",
    "HostGroupTemplate",
    "InvalidHostGroupError",
    "OutcomeKind",
    "ProvisioningOutcome",
    "RemoteResult",
    "SessionContext",
    "UnknownHostError",
    "ValueObject",
    "generate_id",
    "utc_now",
]
