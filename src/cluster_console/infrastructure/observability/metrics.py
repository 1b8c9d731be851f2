"""Prometheus metrics configuration."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Histogram,
    Info,
)


# Application info
APP_INFO = Info("cluster_console", "Cluster console application info")
APP_INFO.info({
    "version": "1.0.0",
    "service": "cluster-console",
})

# Orchestrator metrics
OPERATIONS_TOTAL = Counter(
    "cluster_console_operations_total",
    "Total number of provisioning operations",
    ["operation", "result"],
)

ROLLBACKS_TOTAL = Counter(
    "cluster_console_rollbacks_total",
    "Compensating deletes issued after a failed create",
    ["result"],  # "success", "failure"
)

# Remote API metrics
REMOTE_REQUESTS_TOTAL = Counter(
    "cluster_console_remote_requests_total",
    "Total requests sent to the cluster management API",
    ["method", "status"],
)

REMOTE_REQUEST_DURATION = Histogram(
    "cluster_console_remote_request_duration_seconds",
    "Cluster management API request duration",
    ["method"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)
