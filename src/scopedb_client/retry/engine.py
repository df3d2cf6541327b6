"""
Retrying executor.

Drives one logical operation (a coroutine function performing a single
network attempt) through a RetryPolicy until the policy says Stop, then
hands the final outcome to the response resolver. Intermediate outcomes
are never surfaced to the caller.

Waiting happens through an awaitable ``sleep``, so a pending retry never
blocks the event loop or other in-flight operations. Cancelling the
awaiting task interrupts either the attempt or the delay and propagates
asyncio.CancelledError unchanged.

Usage:
    executor = RetryingExecutor(ResponseResolver())
    response = await executor.execute(
        attempt, RetryPolicy.default(), StatementResponse.model_validate_json,
        operation="submit",
    )
"""

import asyncio
import time
from typing import TYPE_CHECKING, Awaitable, Callable, TypeVar

import structlog

from scopedb_client.models.outcomes import AttemptOutcome, TransportFailure
from scopedb_client.monitoring.metrics import attempts_total, retries_total
from scopedb_client.retry.policy import RetryPolicy
from scopedb_client.retry.state import RetryState, Stop

if TYPE_CHECKING:
    from scopedb_client.client.resolver import ResponseResolver

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Attempt = Callable[[], Awaitable[AttemptOutcome]]


def _outcome_label(outcome: AttemptOutcome) -> str:
    if isinstance(outcome, TransportFailure):
        return "transport_failure"
    return f"{outcome.status_code // 100}xx"


class RetryingExecutor:
    """
    Runs attempts under a retry policy and resolves the last outcome.

    The executor holds no per-operation state: every ``execute`` call owns
    a fresh RetryState, so one executor is safely shared by concurrent
    operations.

    Attributes:
        resolver: Maps the final outcome to a value or a client error
        clock: Monotonic clock in seconds
        sleep: Awaitable delay used between attempts
    """

    def __init__(
        self,
        resolver: "ResponseResolver",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.resolver = resolver
        self.clock = clock
        self.sleep = sleep

    async def execute(
        self,
        attempt: Attempt,
        policy: RetryPolicy,
        parse: Callable[[bytes], T],
        operation: str = "request",
    ) -> T:
        """
        Execute ``attempt`` until ``policy`` stops, then resolve.

        Args:
            attempt: Performs one network round trip; transport failures
                are returned as TransportFailure, not raised
            policy: Retry policy for this operation
            parse: Parses a 2xx body into the result type
            operation: Name used in logs and metrics

        Returns:
            Parsed body of the final 2xx response

        Raises:
            TransportError: Policy stopped on a transport failure
            RemoteError: Final response was non-2xx
            DecodeError: Final 2xx body could not be parsed
            Exception: Anything ``attempt`` itself raises propagates as-is
        """
        state = RetryState(started_at=self.clock(), clock=self.clock)

        while True:
            outcome = await attempt()
            state.record_attempt()
            attempts_total.labels(operation=operation, outcome=_outcome_label(outcome)).inc()

            decision = policy.decide(outcome, state)

            if isinstance(decision, Stop):
                logger.debug(
                    "Retry loop stopped",
                    operation=operation,
                    policy=policy.name,
                    reason=decision.reason,
                    attempts=state.attempt_count,
                    elapsed_s=round(state.elapsed, 3),
                    outcome=_outcome_label(outcome),
                )
                # a final answer that lands after the deadline exhausted nothing
                if decision.reason != "terminal" and policy.should_retry(outcome):
                    logger.warning(
                        "Retry budget exhausted",
                        operation=operation,
                        policy=policy.name,
                        reason=decision.reason,
                        attempts=state.attempt_count,
                        elapsed_s=round(state.elapsed, 3),
                        last_outcome=_outcome_label(outcome),
                    )
                return self.resolver.resolve(outcome, parse)

            retries_total.labels(operation=operation).inc()

            if isinstance(outcome, TransportFailure):
                logger.warning(
                    "Transport failure, retrying",
                    operation=operation,
                    attempt=state.attempt_count,
                    delay_s=round(decision.delay, 3),
                    error=str(outcome),
                )
            else:
                logger.debug(
                    "Retryable response, retrying",
                    operation=operation,
                    policy=policy.name,
                    attempt=state.attempt_count,
                    status_code=outcome.status_code,
                    delay_s=round(decision.delay, 3),
                )

            await self.sleep(decision.delay)
