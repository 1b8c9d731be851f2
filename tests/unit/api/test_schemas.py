"""Unit tests for API schemas."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cluster_console.api.schemas.session_schemas import (
    AssignHostRequest,
    OpenSessionRequest,
    OutcomeResponse,
    SelectBlueprintRequest,
)
from cluster_console.domain.models.outcome import OutcomeKind


class TestOpenSessionRequest:
    def test_operator_optional(self) -> None:
        assert OpenSessionRequest().operator == ""

    def test_operator_too_long(self) -> None:
        with pytest.raises(ValidationError):
            OpenSessionRequest(operator="x" * 201)


class TestSelectBlueprintRequest:
    def test_valid_request(self) -> None:
        assert SelectBlueprintRequest(blueprint_id="bp").blueprint_id == "bp"

    def test_empty_blueprint_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SelectBlueprintRequest(blueprint_id="")


class TestAssignHostRequest:
    def test_valid_request(self) -> None:
        req = AssignHostRequest(host="host1", group="master")
        assert req.host == "host1"
        assert req.group == "master"

    def test_missing_group_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AssignHostRequest(host="host1")


class TestOutcomeResponse:
    def test_kind_serialized_as_value(self) -> None:
        response = OutcomeResponse(success=False, kind=OutcomeKind.NOT_FOUND, message="missing")
        assert response.model_dump(mode="json")["kind"] == OutcomeKind.NOT_FOUND.value
