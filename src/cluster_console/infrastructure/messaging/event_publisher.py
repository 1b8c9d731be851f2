"""Event publisher implementations."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from typing import Any

import structlog

from cluster_console.domain.ports.services import EventPublisher
from cluster_console.infrastructure.observability.metrics import (
    OPERATIONS_TOTAL,
    ROLLBACKS_TOTAL,
)


logger = structlog.get_logger(__name__)

EventHandler = Callable[[dict[str, Any]], None]

DEFAULT_HISTORY_SIZE = 1000


class InMemoryEventPublisher(EventPublisher):
    """In-memory event publisher with synchronous handlers.

    Only the most recent ``history_size`` events are kept.
    """

    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE) -> None:
        self._events: deque[tuple[str, dict[str, Any]]] = deque(maxlen=history_size)
        self._handlers: dict[str, list[EventHandler]] = {}

    def publish(self, event_type: str, payload: dict[str, Any]) -> None:
        self._events.append((event_type, payload))
        logger.debug("event_published", event_type=event_type, payload_keys=list(payload.keys()))

        for handler in self._handlers.get(event_type, []):
            handler(payload)

    def publish_batch(self, events: list[tuple[str, dict[str, Any]]]) -> None:
        for event_type, payload in events:
            self.publish(event_type, payload)

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    @property
    def published_events(self) -> list[tuple[str, dict[str, Any]]]:
        return list(self._events)

    def event_types(self) -> list[str]:
        return [event_type for event_type, _ in self._events]

    def clear(self) -> None:
        self._events.clear()


# event type -> (operation, result) label pair
_OPERATION_LABELS: dict[str, tuple[str, str]] = {
    "blueprint.selected": ("select_blueprint", "success"),
    "host.assigned": ("assign", "success"),
    "host.assignment_rejected": ("assign", "rejected"),
    "cluster.created": ("create_cluster", "success"),
    "cluster.creation_failed": ("create_cluster", "failure"),
    "cluster.deleted": ("delete_cluster", "success"),
    "cluster.deletion_failed": ("delete_cluster", "failure"),
}


def register_metrics_handlers(publisher: InMemoryEventPublisher) -> None:
    """Count orchestrator events in Prometheus."""
    for event_type, (operation, result) in _OPERATION_LABELS.items():
        publisher.subscribe(
            event_type,
            lambda _payload, op=operation, res=result: OPERATIONS_TOTAL.labels(
                operation=op, result=res
            ).inc(),
        )

    def _count_rollback(payload: dict[str, Any]) -> None:
        ROLLBACKS_TOTAL.labels(result="success" if payload.get("success") else "failure").inc()

    publisher.subscribe("cluster.rollback_attempted", _count_rollback)
