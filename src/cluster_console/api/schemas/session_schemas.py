"""API schemas for console session endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from cluster_console.domain.models.outcome import OutcomeKind
from cluster_console.domain.models.session import FocusType


class OpenSessionRequest(BaseModel):
    operator: str = Field(default="", max_length=200)


class SelectBlueprintRequest(BaseModel):
    blueprint_id: str = Field(..., min_length=1)


class AssignHostRequest(BaseModel):
    host: str = Field(..., min_length=1)
    group: str = Field(..., min_length=1)


class OutcomeResponse(BaseModel):
    success: bool
    kind: OutcomeKind
    message: str


class SessionResponse(BaseModel):
    id: str
    operator: str
    focus_value: str
    focus_type: FocusType
    connected: bool
    cluster_name: str
    host_groups: dict[str, list[str]] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime
