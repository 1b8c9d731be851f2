"""Structured results of remote calls and orchestrator operations."""

from __future__ import annotations

from enum import Enum

from cluster_console.domain.models.base import ValueObject


class OutcomeKind(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    INVALID_ASSIGNMENT = "invalid_assignment"
    REMOTE_ERROR = "remote_error"
    PRECONDITION = "precondition"


class RemoteResult(ValueObject):
    """Result of a mutating call against the cluster management API."""

    success: bool
    message: str = ""

    @classmethod
    def ok(cls, message: str = "") -> RemoteResult:
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, message: str) -> RemoteResult:
        return cls(success=False, message=message)


class ProvisioningOutcome(ValueObject):
    """Human-readable outcome returned by every orchestrator operation."""

    success: bool
    message: str
    kind: OutcomeKind = OutcomeKind.OK

    @classmethod
    def ok(cls, message: str) -> ProvisioningOutcome:
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, message: str, kind: OutcomeKind) -> ProvisioningOutcome:
        return cls(success=False, message=message, kind=kind)

    def __str__(self) -> str:
        return self.message
