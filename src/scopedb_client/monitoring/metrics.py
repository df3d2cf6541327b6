"""Prometheus metrics for the ScopeDB client.

Registered on the default prometheus_client registry; the embedding
application decides whether and where to expose them.
"""

from prometheus_client import Counter, Histogram

# === Attempt Metrics ===

attempts_total = Counter(
    "scopedb_attempts_total",
    "Network attempts by operation and outcome",
    ["operation", "outcome"],
)
"""
Every network attempt, retried or not.

Labels:
- operation: submit, fetch, ingest
- outcome: transport_failure, or the HTTP status class (2xx, 4xx, 5xx)
"""

retries_total = Counter(
    "scopedb_retries_total",
    "Attempts that were followed by another attempt",
    ["operation"],
)
"""
Retries scheduled by the retry policy.

For fetch with polling this includes "not finished yet" polls, so a high
rate there reflects statement latency rather than network health.
"""

# === Result Metrics ===

client_errors_total = Counter(
    "scopedb_client_errors_total",
    "Operations that ended in a classified client error",
    ["operation", "kind"],
)
"""
Terminal failures by kind: transport, remote, decode.
"""

request_latency_seconds = Histogram(
    "scopedb_request_latency_seconds",
    "Wall-clock time of one logical operation, retries included",
    ["operation"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0],
)
