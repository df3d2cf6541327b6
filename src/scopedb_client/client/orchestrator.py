"""
ScopeDB statement orchestration.

ScopeDBClient exposes the three service operations as coroutines:

- ingest_batch / ingest: POST /v1/ingest, retried on transport failure only
- submit: POST /v1/statements, optionally followed by polling until done
- fetch: GET /v1/statements/{id}, optionally polled until finished or failed

Every operation returns the parsed response or raises one of
TransportError, RemoteError, DecodeError.

Usage:
    async with ScopeDBClient.from_settings() as client:
        response = await client.submit(
            StatementRequest(statement="FROM t SELECT *"), wait_until_done=True
        )
"""

import time
from typing import Any, Callable, Optional, Sequence, TypeVar
from urllib.parse import quote

import structlog

from scopedb_client.client.batch import BatchEncoder, JsonRowsEncoder
from scopedb_client.client.exceptions import ScopeDBError
from scopedb_client.client.resolver import ResponseResolver
from scopedb_client.client.transport import HttpTransport, HttpxTransport
from scopedb_client.config import Settings, get_settings
from scopedb_client.logging_config import configure_logging
from scopedb_client.models.enums import IngestFormat
from scopedb_client.models.requests import (
    FetchStatementParams,
    IngestData,
    IngestRequest,
    StatementRequest,
)
from scopedb_client.models.responses import IngestResponse, StatementResponse
from scopedb_client.monitoring.metrics import client_errors_total, request_latency_seconds
from scopedb_client.retry.engine import Attempt, RetryingExecutor
from scopedb_client.retry.policy import RetryPolicy

logger = structlog.get_logger(__name__)

T = TypeVar("T")

INGEST_PATH = "/v1/ingest"
STATEMENTS_PATH = "/v1/statements"


class ScopeDBClient:
    """
    Asynchronous ScopeDB client with built-in retries.

    Holds no per-call state: policies are immutable and every operation
    owns its own retry state, so concurrent calls are independent.

    Attributes:
        transport: HTTP execution primitive
        encoder: Columnar batch encoder used by ingest_batch
        executor: Retrying executor shared by all operations
        default_policy: Retries transport failures only
        poll_policy: Also retries unfinished statements
    """

    def __init__(
        self,
        transport: HttpTransport,
        settings: Optional[Settings] = None,
        encoder: Optional[BatchEncoder] = None,
        executor: Optional[RetryingExecutor] = None,
        default_policy: Optional[RetryPolicy] = None,
        poll_policy: Optional[RetryPolicy] = None,
        owns_transport: bool = False,
    ):
        settings = settings or get_settings()

        self.transport = transport
        self.encoder: BatchEncoder = encoder or JsonRowsEncoder()
        self.executor = executor or RetryingExecutor(ResponseResolver())
        self.default_policy = default_policy or RetryPolicy.default(settings)
        self.poll_policy = poll_policy or RetryPolicy.poll_until_done(settings)
        self._owns_transport = owns_transport

        logger.info(
            "ScopeDB client initialized",
            transport=repr(transport),
            base_delay=self.default_policy.base_delay,
            jitter=self.default_policy.jitter_fraction,
            max_elapsed=self.default_policy.max_elapsed,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ScopeDBClient":
        """
        Build a client with an httpx transport it owns and closes.

        Also configures logging when ``settings.CONFIGURE_LOGGING`` is set.
        """
        settings = settings or get_settings()
        if settings.CONFIGURE_LOGGING:
            configure_logging(settings)
        return cls(
            HttpxTransport.from_settings(settings),
            settings=settings,
            owns_transport=True,
        )

    # === Ingestion ===

    async def ingest_batch(self, batches: Sequence[Any], statement: str) -> IngestResponse:
        """
        Encode columnar batches and ingest them through ``statement``.

        Args:
            batches: Columnar batches understood by the configured encoder
            statement: Statement the rows are fed into

        Returns:
            IngestResponse
        """
        rows = self.encoder.encode(batches)
        return await self.ingest(rows, statement, format=self.encoder.format)

    async def ingest(
        self,
        rows: str,
        statement: str,
        format: IngestFormat = IngestFormat.JSON,
    ) -> IngestResponse:
        """Ingest rows that are already encoded. Single exchange, no polling."""
        body = IngestRequest(
            data=IngestData(format=format, rows=rows),
            statement=statement,
        ).to_body()

        async def attempt():
            return await self.transport.send("POST", INGEST_PATH, json=body)

        return await self._run(
            "ingest", attempt, self.default_policy, IngestResponse.model_validate_json
        )

    # === Statements ===

    async def submit(
        self,
        request: StatementRequest,
        wait_until_done: bool = False,
    ) -> StatementResponse:
        """
        Submit a statement.

        With ``wait_until_done`` an unfinished submit response is followed
        by polling fetch until the statement finishes; only the final fetch
        response is returned. Submit failures surface directly.

        Args:
            request: Statement to execute
            wait_until_done: Poll until the statement is finished

        Returns:
            StatementResponse (the submit response, or the last poll)
        """
        body = request.to_body()

        async def attempt():
            return await self.transport.send("POST", STATEMENTS_PATH, json=body)

        submitted = await self._run(
            "submit", attempt, self.default_policy, StatementResponse.model_validate_json
        )

        if not wait_until_done or submitted.is_finished:
            return submitted

        logger.info(
            "Statement not finished, polling",
            statement_id=submitted.statement_id,
            status=submitted.status.name,
        )
        params = FetchStatementParams(
            statement_id=submitted.statement_id,
            format=request.format,
        )
        return await self.fetch(params, retry_until_done=True)

    async def fetch(
        self,
        params: FetchStatementParams,
        retry_until_done: bool = False,
    ) -> StatementResponse:
        """
        Fetch the current state of a statement.

        Args:
            params: Statement handle and result format
            retry_until_done: Keep polling until the status is finished or
                failed; error responses still end polling immediately

        Returns:
            StatementResponse
        """
        path = f"{STATEMENTS_PATH}/{quote(params.statement_id, safe='')}"
        query = params.query_params()
        policy = self.poll_policy if retry_until_done else self.default_policy

        async def attempt():
            return await self.transport.send("GET", path, params=query)

        return await self._run("fetch", attempt, policy, StatementResponse.model_validate_json)

    # === Internals ===

    async def _run(
        self,
        operation: str,
        attempt: Attempt,
        policy: RetryPolicy,
        parse: Callable[[bytes], T],
    ) -> T:
        start = time.monotonic()
        try:
            return await self.executor.execute(attempt, policy, parse, operation=operation)
        except ScopeDBError as e:
            client_errors_total.labels(operation=operation, kind=e.kind).inc()
            logger.debug("ScopeDB operation failed", operation=operation, exc_info=e)
            raise
        finally:
            request_latency_seconds.labels(operation=operation).observe(
                time.monotonic() - start
            )

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self.transport.close()

    async def __aenter__(self) -> "ScopeDBClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
