"""
Retry bookkeeping and decisions.

RetryState is owned by exactly one in-flight executor invocation and is
dropped when that invocation returns. Decisions are the policy's answer to
"should this operation try again?".
"""

from dataclasses import dataclass, field
from typing import Callable, Union


@dataclass
class RetryState:
    """
    Progress of one logical operation.

    Attributes:
        started_at: Clock reading taken before the first attempt
        clock: Monotonic clock used to measure elapsed time
        attempt_count: Attempts completed so far
    """

    started_at: float
    clock: Callable[[], float] = field(repr=False)
    attempt_count: int = 0

    @property
    def elapsed(self) -> float:
        """Seconds since the first attempt started."""
        return max(0.0, self.clock() - self.started_at)

    def record_attempt(self) -> None:
        self.attempt_count += 1


@dataclass(frozen=True)
class Stop:
    """
    Do not try again; resolve the last outcome.

    Attributes:
        reason: deadline, max_attempts or terminal (the predicate said no)
    """

    reason: str


@dataclass(frozen=True)
class RetryAfter:
    """Try again after ``delay`` seconds."""

    delay: float

    def __post_init__(self) -> None:
        if self.delay < 0:
            raise ValueError("delay must be >= 0")


Decision = Union[Stop, RetryAfter]
