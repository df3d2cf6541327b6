"""Unit test fixtures (fakes and stubs).

Provides a fake clock, a scripted transport and a client wired to both,
so retry timing is tested without real sleeps or network access.
"""

from dataclasses import dataclass
from typing import Any, Optional

import httpx
import pytest

from scopedb_client.client.orchestrator import ScopeDBClient
from scopedb_client.client.resolver import ResponseResolver
from scopedb_client.client.transport import HttpTransport
from scopedb_client.models.outcomes import AttemptOutcome, TransportFailure
from scopedb_client.retry.engine import RetryingExecutor


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, delay: float) -> None:
        self.sleeps.append(delay)
        self.now += delay


@dataclass(frozen=True)
class RecordedCall:
    method: str
    path: str
    params: Optional[dict]
    json: Any


class ScriptedTransport(HttpTransport):
    """
    Transport replaying a fixed list of outcomes.

    With ``repeat_last`` the final outcome is returned forever; otherwise
    an extra attempt fails the test. ``per_attempt_seconds`` advances the
    fake clock on each attempt to simulate network latency.
    """

    def __init__(
        self,
        outcomes: list[AttemptOutcome],
        clock: Optional[FakeClock] = None,
        repeat_last: bool = False,
        per_attempt_seconds: float = 0.0,
    ):
        self.outcomes = list(outcomes)
        self.clock = clock
        self.repeat_last = repeat_last
        self.per_attempt_seconds = per_attempt_seconds
        self.calls: list[RecordedCall] = []
        self.closed = False

    async def send(self, method, path, *, params=None, json=None) -> AttemptOutcome:
        self.calls.append(
            RecordedCall(method, path, dict(params) if params is not None else None, json)
        )
        if self.clock is not None and self.per_attempt_seconds:
            self.clock.advance(self.per_attempt_seconds)

        if len(self.outcomes) > 1 or (self.outcomes and not self.repeat_last):
            return self.outcomes.pop(0)
        if self.outcomes:
            return self.outcomes[0]
        raise AssertionError(f"unexpected attempt: {method} {path}")

    def calls_to(self, method: str, path_prefix: str) -> list[RecordedCall]:
        return [
            c for c in self.calls if c.method == method and c.path.startswith(path_prefix)
        ]

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def connect_failure():
    """Factory fixture for a connection-refused TransportFailure."""

    def _create(message: str = "connection refused") -> TransportFailure:
        return TransportFailure(httpx.ConnectError(message))

    return _create


@pytest.fixture
def scripted_transport(fake_clock):
    """Factory fixture for a ScriptedTransport bound to the fake clock.

    Usage:
        def test_something(scripted_transport, statement_response):
            transport = scripted_transport([statement_response("finished")])
    """

    def _create(outcomes, repeat_last: bool = False, per_attempt_seconds: float = 0.0):
        return ScriptedTransport(
            outcomes,
            clock=fake_clock,
            repeat_last=repeat_last,
            per_attempt_seconds=per_attempt_seconds,
        )

    return _create


@pytest.fixture
def executor(fake_clock) -> RetryingExecutor:
    """RetryingExecutor running on the fake clock."""
    return RetryingExecutor(ResponseResolver(), clock=fake_clock, sleep=fake_clock.sleep)


@pytest.fixture
def make_client(executor, test_settings):
    """Factory fixture for a ScopeDBClient over a given transport.

    Usage:
        def test_something(make_client, scripted_transport):
            client = make_client(scripted_transport([...]))
    """

    def _create(transport: HttpTransport, **kwargs) -> ScopeDBClient:
        return ScopeDBClient(transport, settings=test_settings, executor=executor, **kwargs)

    return _create
