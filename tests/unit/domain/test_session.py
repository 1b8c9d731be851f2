"""Unit tests for session context and console sessions."""

from __future__ import annotations

from cluster_console.domain.models.assignment import AssignmentStore
from cluster_console.domain.models.blueprint import HostGroupTemplate
from cluster_console.domain.models.outcome import OutcomeKind, ProvisioningOutcome, RemoteResult
from cluster_console.domain.models.session import ConsoleSession, FocusType, SessionContext


class TestSessionContext:
    def test_initial_state(self) -> None:
        context = SessionContext()
        assert context.get_focus_value() == ""
        assert context.focus_type == FocusType.ROOT
        assert not context.is_connected_to_cluster()

    def test_blueprint_focus(self) -> None:
        context = SessionContext()
        context.set_blueprint_focus("bp")
        assert context.is_focus_on_blueprint()
        assert context.get_focus_value() == "bp"

    def test_reset_focus(self) -> None:
        context = SessionContext()
        context.set_blueprint_focus("bp")
        context.reset_focus()
        assert context.get_focus_value() == ""
        assert not context.is_focus_on_blueprint()

    def test_connect_cluster(self) -> None:
        context = SessionContext()
        context.connect_cluster("cluster")
        assert context.is_connected_to_cluster()
        assert context.get_cluster() == "cluster"

    def test_hints_follow_state(self) -> None:
        context = SessionContext()
        assert "cluster build" in context.get_hint()
        context.set_blueprint_focus("bp")
        assert "cluster assign" in context.get_hint()
        context.reset_focus()
        context.connect_cluster("cluster")
        assert "services list" in context.get_hint()


class TestConsoleSession:
    def test_open_has_no_assignments(self) -> None:
        session = ConsoleSession.open(operator="ops")
        assert session.operator == "ops"
        assert session.assignments is None

    def test_replace_and_discard(self) -> None:
        session = ConsoleSession.open()
        store = AssignmentStore.from_template(HostGroupTemplate(groups={"g": []}), [])
        session.replace_assignments(store)
        assert session.assignments == store
        session.discard_assignments()
        assert session.assignments is None

    def test_sessions_are_independent(self) -> None:
        first = ConsoleSession.open()
        second = ConsoleSession.open()
        first.context.set_blueprint_focus("bp")
        assert second.context.get_focus_value() == ""
        assert first.id != second.id


class TestOutcomes:
    def test_provisioning_outcome_str(self) -> None:
        outcome = ProvisioningOutcome.failed("boom", OutcomeKind.REMOTE_ERROR)
        assert str(outcome) == "boom"
        assert not outcome.success

    def test_ok_outcome_kind(self) -> None:
        assert ProvisioningOutcome.ok("done").kind == OutcomeKind.OK

    def test_remote_result(self) -> None:
        assert RemoteResult.ok().success
        failed = RemoteResult.failed("msg")
        assert not failed.success
        assert failed.message == "msg"
