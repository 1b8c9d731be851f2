"""OpenTelemetry tracing for calls to the cluster management API."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
)

from cluster_console.config import ObservabilitySettings


TRACER_NAME = "cluster_console"


def setup_tracing(settings: ObservabilitySettings) -> None:
    """Install a tracer provider exporting spans to stderr.

    Does nothing unless tracing is enabled; the console's stdout is
    reserved for command output.
    """
    if not settings.tracing_enabled:
        return

    provider = TracerProvider(resource=Resource.create({
        "service.name": settings.service_name,
        "service.version": "1.0.0",
    }))
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
    trace.set_tracer_provider(provider)


def get_tracer(name: str = TRACER_NAME) -> trace.Tracer:
    return trace.get_tracer(name)


@contextmanager
def remote_call_span(method: str, path: str) -> Iterator[trace.Span]:
    """Span around one remote request, tagged with its method and path."""
    with get_tracer().start_as_current_span(f"ambari {method} {path}") as span:
        span.set_attribute("http.method", method)
        span.set_attribute("ambari.path", path)
        yield span
