"""Console session API routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    status,
)

from cluster_console.api.dependencies.services import get_service_container, ServiceContainer
from cluster_console.api.schemas.session_schemas import (
    AssignHostRequest,
    OpenSessionRequest,
    OutcomeResponse,
    SelectBlueprintRequest,
    SessionResponse,
)
from cluster_console.domain.models.outcome import ProvisioningOutcome
from cluster_console.domain.models.session import ConsoleSession
from cluster_console.infrastructure.session.registry import SessionNotFoundError, SessionRegistry


router = APIRouter(prefix="/sessions", tags=["sessions"])


def _sessions(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> SessionRegistry:
    return container.sessions


Sessions = Annotated[SessionRegistry, Depends(_sessions)]


def _to_response(session: ConsoleSession) -> SessionResponse:
    """Map domain model to API response."""
    context = session.context
    return SessionResponse(
        id=session.id,
        operator=session.operator,
        focus_value=context.focus_value,
        focus_type=context.focus_type,
        connected=context.connected,
        cluster_name=context.cluster_name,
        host_groups=session.assignments.snapshot() if session.assignments else {},
        created_at=session.created_at,
        updated_at=session.updated_at,
    )


def _outcome(outcome: ProvisioningOutcome) -> OutcomeResponse:
    return OutcomeResponse(success=outcome.success, kind=outcome.kind, message=outcome.message)


def _not_found(e: SessionNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def open_session(request: OpenSessionRequest, sessions: Sessions) -> SessionResponse:
    """Open a new operator session."""
    return _to_response(sessions.open(operator=request.operator))


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(session_id: str, sessions: Sessions) -> SessionResponse:
    try:
        with sessions.orchestrator(session_id) as orchestrator:
            return _to_response(orchestrator.session)
    except SessionNotFoundError as e:
        raise _not_found(e) from e


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def close_session(session_id: str, sessions: Sessions) -> None:
    try:
        sessions.close(session_id)
    except SessionNotFoundError as e:
        raise _not_found(e) from e


@router.post("/{session_id}/blueprint", response_model=OutcomeResponse)
def select_blueprint(
    session_id: str, request: SelectBlueprintRequest, sessions: Sessions
) -> OutcomeResponse:
    """Put a blueprint in focus and seed the session's host groups."""
    try:
        with sessions.orchestrator(session_id) as orchestrator:
            return _outcome(orchestrator.select_blueprint(request.blueprint_id))
    except SessionNotFoundError as e:
        raise _not_found(e) from e


@router.post("/{session_id}/assignments", response_model=OutcomeResponse)
def assign_host(
    session_id: str, request: AssignHostRequest, sessions: Sessions
) -> OutcomeResponse:
    try:
        with sessions.orchestrator(session_id) as orchestrator:
            return _outcome(orchestrator.assign(request.host, request.group))
    except SessionNotFoundError as e:
        raise _not_found(e) from e


@router.get("/{session_id}/assignments", response_model=OutcomeResponse)
def preview_assignments(session_id: str, sessions: Sessions) -> OutcomeResponse:
    try:
        with sessions.orchestrator(session_id) as orchestrator:
            return _outcome(orchestrator.preview())
    except SessionNotFoundError as e:
        raise _not_found(e) from e


@router.post("/{session_id}/cluster", response_model=OutcomeResponse)
def create_cluster(session_id: str, sessions: Sessions) -> OutcomeResponse:
    """Create the cluster; a failed create is rolled back before responding."""
    try:
        with sessions.orchestrator(session_id) as orchestrator:
            return _outcome(orchestrator.create_cluster())
    except SessionNotFoundError as e:
        raise _not_found(e) from e


@router.delete("/{session_id}/cluster", response_model=OutcomeResponse)
def delete_cluster(session_id: str, sessions: Sessions) -> OutcomeResponse:
    try:
        with sessions.orchestrator(session_id) as orchestrator:
            return _outcome(orchestrator.delete_cluster())
    except SessionNotFoundError as e:
        raise _not_found(e) from e
