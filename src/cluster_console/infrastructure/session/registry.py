"""In-memory registry isolating one console session per operator."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

import structlog

from cluster_console.domain.models.session import ConsoleSession
from cluster_console.domain.ports.services import ClusterManagementApi, EventPublisher
from cluster_console.domain.services.provisioning_service import ProvisioningOrchestrator


logger = structlog.get_logger(__name__)


@dataclass
class SessionEntry:
    session: ConsoleSession
    orchestrator: ProvisioningOrchestrator
    lock: threading.RLock = field(default_factory=threading.RLock)


class SessionRegistry:
    """Keeps each operator's session, orchestrator and lock together.

    Operations on one session are serialized by that session's lock;
    different sessions never share state.
    """

    def __init__(
        self, api: ClusterManagementApi, event_publisher: EventPublisher | None = None
    ) -> None:
        self._api = api
        self._event_publisher = event_publisher
        self._entries: dict[str, SessionEntry] = {}
        self._lock = threading.Lock()

    def open(self, operator: str = "") -> ConsoleSession:
        session = ConsoleSession.open(operator=operator)
        entry = SessionEntry(
            session=session,
            orchestrator=ProvisioningOrchestrator(self._api, session, self._event_publisher),
        )
        entry.orchestrator.detect_cluster()
        with self._lock:
            self._entries[session.id] = entry
        logger.info(
            "session_opened",
            session_id=session.id,
            operator=operator,
            cluster_name=session.context.get_cluster(),
        )
        return session

    def get(self, session_id: str) -> ConsoleSession:
        return self._entry(session_id).session

    def close(self, session_id: str) -> None:
        with self._lock:
            if self._entries.pop(session_id, None) is None:
                raise SessionNotFoundError(f"Session {session_id} not found")
        logger.info("session_closed", session_id=session_id)

    def __len__(self) -> int:
        return len(self._entries)

    def _entry(self, session_id: str) -> SessionEntry:
        with self._lock:
            entry = self._entries.get(session_id)
        if entry is None:
            raise SessionNotFoundError(f"Session {session_id} not found")
        return entry

    @contextmanager
    def orchestrator(self, session_id: str) -> Iterator[ProvisioningOrchestrator]:
        """Hold the session's lock while its orchestrator is in use."""
        entry = self._entry(session_id)
        with entry.lock:
            yield entry.orchestrator


class SessionNotFoundError(Exception):
    """Raised when a session id is not registered."""
