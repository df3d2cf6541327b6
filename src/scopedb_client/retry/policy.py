"""
Retry policies.

A policy is immutable configuration plus a pure decision function: given
the outcome of the latest attempt and the operation's RetryState it
answers Stop or RetryAfter(delay). No I/O happens here.

Two predicates cover every ScopeDB call:
    - retry_on_transport_failure: only a missing response is retried;
      any HTTP response, success or not, is final
    - retry_until_done: additionally retries a 2xx statement response
      whose status is not yet terminal (finished or failed); non-2xx is
      always final

Delays are a constant base perturbed by bounded jitter, not exponential.
The deadline is measured in wall-clock time since the first attempt and
overrides the predicate.
"""

import random
from dataclasses import dataclass, field
from typing import Callable, Optional

from scopedb_client.config import Settings, get_settings
from scopedb_client.models.codec import from_wire
from scopedb_client.models.enums import StatementStatus
from scopedb_client.models.outcomes import AttemptOutcome, TransportFailure
from scopedb_client.retry.state import Decision, RetryAfter, RetryState, Stop

RetryPredicate = Callable[[AttemptOutcome], bool]


def retry_on_transport_failure(outcome: AttemptOutcome) -> bool:
    """Retry when no response was obtained; every response is final."""
    return isinstance(outcome, TransportFailure)


def retry_until_done(outcome: AttemptOutcome) -> bool:
    """
    Retry until a statement reports a terminal status.

    A 2xx body that has no readable status is final: the resolver will
    report it as a decode failure.
    """
    if isinstance(outcome, TransportFailure):
        return True

    # all non-2xx responses are permanent failures
    if not outcome.is_success:
        return False

    try:
        status = from_wire(StatementStatus, outcome.json()["status"])
    except (ValueError, KeyError, TypeError):
        return False

    return not status.is_terminal


@dataclass(frozen=True)
class RetryPolicy:
    """
    Immutable retry configuration.

    Attributes:
        base_delay: Seconds between attempts before jitter
        jitter_fraction: Relative jitter in [0, 1); 0.15 means +/- 15%
        max_elapsed: Deadline in seconds since the first attempt (None: no deadline)
        should_retry: Predicate deciding whether an outcome is retryable
        max_attempts: Optional cap on attempts (None: bounded by the deadline only)
        name: Label used in logs
        rng: Random source for jitter (module random when None)
    """

    base_delay: float = 1.0
    jitter_fraction: float = 0.15
    max_elapsed: Optional[float] = 60.0
    should_retry: RetryPredicate = retry_on_transport_failure
    max_attempts: Optional[int] = None
    name: str = "default"
    rng: Optional[random.Random] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.base_delay < 0:
            raise ValueError("base_delay must be >= 0")
        if not 0.0 <= self.jitter_fraction < 1.0:
            raise ValueError("jitter_fraction must be in [0, 1)")
        if self.max_elapsed is not None and self.max_elapsed < 0:
            raise ValueError("max_elapsed must be >= 0")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        should_retry: RetryPredicate = retry_on_transport_failure,
        name: str = "default",
        rng: Optional[random.Random] = None,
    ) -> "RetryPolicy":
        return cls(
            base_delay=settings.RETRY_BASE_DELAY,
            jitter_fraction=settings.RETRY_JITTER,
            max_elapsed=settings.RETRY_MAX_ELAPSED,
            should_retry=should_retry,
            max_attempts=settings.RETRY_MAX_ATTEMPTS,
            name=name,
            rng=rng,
        )

    @classmethod
    def default(cls, settings: Optional[Settings] = None) -> "RetryPolicy":
        """Retry transport failures only."""
        return cls.from_settings(settings or get_settings())

    @classmethod
    def poll_until_done(cls, settings: Optional[Settings] = None) -> "RetryPolicy":
        """Retry transport failures and statements still queued or running."""
        return cls.from_settings(
            settings or get_settings(),
            should_retry=retry_until_done,
            name="poll_until_done",
        )

    def decide(self, outcome: AttemptOutcome, state: RetryState) -> Decision:
        """Stop or retry after the attempt that produced ``outcome``."""
        if self.max_elapsed is not None and state.elapsed >= self.max_elapsed:
            return Stop("deadline")

        if self.max_attempts is not None and state.attempt_count >= self.max_attempts:
            return Stop("max_attempts")

        if not self.should_retry(outcome):
            return Stop("terminal")

        return RetryAfter(self.next_delay())

    def next_delay(self) -> float:
        """Base delay with uniform jitter, never negative."""
        source = self.rng or random
        jitter = source.uniform(-self.jitter_fraction, self.jitter_fraction)
        return max(0.0, self.base_delay * (1.0 + jitter))
