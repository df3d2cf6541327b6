"""
Retry machinery for ScopeDB calls.

Main Components:
    - RetryPolicy: Immutable configuration and the Stop/RetryAfter decision
    - RetryState: Per-invocation attempt count and elapsed time
    - RetryingExecutor: Runs attempts under a policy, then resolves the outcome

Usage:
    >>> from scopedb_client.retry import RetryPolicy, RetryingExecutor
    >>> executor = RetryingExecutor(resolver)
    >>> value = await executor.execute(attempt, RetryPolicy.default(), parse)
"""

from scopedb_client.retry.engine import RetryingExecutor
from scopedb_client.retry.policy import (
    RetryPolicy,
    RetryPredicate,
    retry_on_transport_failure,
    retry_until_done,
)
from scopedb_client.retry.state import Decision, RetryAfter, RetryState, Stop

__all__ = [
    "RetryingExecutor",
    "RetryPolicy",
    "RetryPredicate",
    "retry_on_transport_failure",
    "retry_until_done",
    "RetryState",
    "Decision",
    "RetryAfter",
    "Stop",
]
