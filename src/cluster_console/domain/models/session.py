"""Operator session state."""

from __future__ import annotations

from enum import Enum

from cluster_console.domain.models.assignment import AssignmentStore
from cluster_console.domain.models.base import DomainEntity


class FocusType(str, Enum):
    """What the operator is currently working on."""

    ROOT = "root"
    BLUEPRINT = "blueprint"


class SessionContext(DomainEntity):
    """Focus and connection facts shared by the console commands."""

    focus_value: str = ""
    focus_type: FocusType = FocusType.ROOT
    connected: bool = False
    cluster_name: str = ""

    def get_focus_value(self) -> str:
        return self.focus_value

    def set_blueprint_focus(self, blueprint_id: str) -> None:
        self.focus_value = blueprint_id
        self.focus_type = FocusType.BLUEPRINT
        self.touch()

    def reset_focus(self) -> None:
        self.focus_value = ""
        self.focus_type = FocusType.ROOT
        self.touch()

    def connect_cluster(self, cluster_name: str) -> None:
        self.cluster_name = cluster_name
        self.connected = True
        self.touch()

    def get_cluster(self) -> str:
        return self.cluster_name

    def is_connected_to_cluster(self) -> bool:
        return self.connected

    def is_focus_on_blueprint(self) -> bool:
        return self.focus_type == FocusType.BLUEPRINT and bool(self.focus_value)

    def get_hint(self) -> str:
        """Suggest the next step for the current state."""
        if self.is_focus_on_blueprint():
            return (
                f"Assign hosts to the host groups of '{self.focus_value}' with "
                "'cluster assign', check them with 'cluster preview' and then "
                "'cluster create'"
            )
        if self.connected:
            return (
                f"Connected to '{self.cluster_name}': try 'services list', "
                "'services start' or 'cluster delete'"
            )
        return "Select a blueprint with 'cluster build --blueprint <id>'"


class ConsoleSession(DomainEntity):
    """One operator's session: context plus the staged assignments."""

    operator: str = ""
    context: SessionContext
    assignments: AssignmentStore | None = None

    @classmethod
    def open(cls, operator: str = "") -> ConsoleSession:
        return cls(operator=operator, context=SessionContext())

    def replace_assignments(self, store: AssignmentStore) -> None:
        self.assignments = store
        self.touch()

    def discard_assignments(self) -> None:
        self.assignments = None
        self.touch()
