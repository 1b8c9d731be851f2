"""Unit tests for event publisher."""

from __future__ import annotations

from cluster_console.infrastructure.messaging.event_publisher import (
    InMemoryEventPublisher,
    register_metrics_handlers,
)
from cluster_console.infrastructure.observability.metrics import (
    OPERATIONS_TOTAL,
    ROLLBACKS_TOTAL,
)


class TestInMemoryEventPublisher:
    def test_publish(self) -> None:
        publisher = InMemoryEventPublisher()
        publisher.publish("test.event", {"key": "value"})
        assert len(publisher.published_events) == 1
        assert publisher.published_events[0] == ("test.event", {"key": "value"})

    def test_publish_batch(self) -> None:
        publisher = InMemoryEventPublisher()
        events = [
            ("event.1", {"id": 1}),
            ("event.2", {"id": 2}),
        ]
        publisher.publish_batch(events)
        assert publisher.event_types() == ["event.1", "event.2"]

    def test_subscribe_and_receive(self) -> None:
        publisher = InMemoryEventPublisher()
        received: list = []

        publisher.subscribe("test.event", received.append)
        publisher.publish("test.event", {"data": "hello"})
        publisher.publish("other.event", {"data": "ignored"})
        assert received == [{"data": "hello"}]

    def test_clear(self) -> None:
        publisher = InMemoryEventPublisher()
        publisher.publish("test", {})
        publisher.clear()
        assert len(publisher.published_events) == 0

    def test_history_keeps_most_recent_events(self) -> None:
        publisher = InMemoryEventPublisher(history_size=2)
        received: list = []
        publisher.subscribe("event.1", received.append)

        for i in range(1, 4):
            publisher.publish(f"event.{i}", {"id": i})

        assert publisher.event_types() == ["event.2", "event.3"]
        assert received == [{"id": 1}]


class TestMetricsHandlers:
    def test_operations_counted(self) -> None:
        publisher = InMemoryEventPublisher()
        register_metrics_handlers(publisher)
        counter = OPERATIONS_TOTAL.labels(operation="delete_cluster", result="failure")
        before = counter._value.get()

        publisher.publish("cluster.deletion_failed", {})

        assert counter._value.get() == before + 1

    def test_rollbacks_counted_by_result(self) -> None:
        publisher = InMemoryEventPublisher()
        register_metrics_handlers(publisher)
        succeeded = ROLLBACKS_TOTAL.labels(result="success")
        failed = ROLLBACKS_TOTAL.labels(result="failure")
        before_success, before_failure = succeeded._value.get(), failed._value.get()

        publisher.publish("cluster.rollback_attempted", {"success": True})
        publisher.publish("cluster.rollback_attempted", {"success": False})
        publisher.publish("cluster.rollback_attempted", {"success": False})

        assert succeeded._value.get() == before_success + 1
        assert failed._value.get() == before_failure + 2
