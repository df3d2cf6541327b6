"""Monitoring and metrics instrumentation for the ScopeDB client."""

from scopedb_client.monitoring.metrics import (
    attempts_total,
    client_errors_total,
    request_latency_seconds,
    retries_total,
)

__all__ = [
    "attempts_total",
    "retries_total",
    "client_errors_total",
    "request_latency_seconds",
]
