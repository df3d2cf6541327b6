"""
HTTP execution primitive.

A transport performs exactly one network attempt and reports what happened
as an AttemptOutcome. It never retries and never raises for transport-level
failures; those come back as TransportFailure values so the retry policy
can judge them.

HttpxTransport is the default implementation, built on httpx.AsyncClient
with a persistent connection pool.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

import httpx
import structlog

from scopedb_client.config import Settings
from scopedb_client.models.outcomes import AttemptOutcome, HttpResponse, TransportFailure

logger = structlog.get_logger(__name__)


class HttpTransport(ABC):
    """
    Abstract base class for HTTP transports.

    Responsibilities:
    - Send one request and return its outcome
    - Release the response even if reading the body fails

    Does NOT handle:
    - Retries (that's RetryingExecutor's job)
    - Status classification (that's ResponseResolver's job)
    """

    @abstractmethod
    async def send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, str]] = None,
        json: Optional[Any] = None,
    ) -> AttemptOutcome:
        """
        Perform one network attempt.

        Returns:
            TransportFailure if no response was obtained, else HttpResponse
        """

    async def close(self) -> None:
        """Release connections. Default implementation does nothing."""


class HttpxTransport(HttpTransport):
    """
    httpx-based transport with connection pooling.

    The body is read inside ``client.stream(...)`` so the connection is
    returned to the pool whether or not reading succeeds.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        connection_limits: Optional[httpx.Limits] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize transport.

        Args:
            base_url: ScopeDB endpoint, e.g. http://localhost:6543
            timeout: Per-attempt timeout in seconds
            connection_limits: httpx pool limits (default: 10 max connections)
            client: Pre-built AsyncClient (tests inject one with MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0,
            )
        self._connection_limits = connection_limits
        self._client: Optional[httpx.AsyncClient] = client

        logger.info(
            "ScopeDB transport initialized",
            base_url=self.base_url,
            timeout=timeout,
            connection_limits=str(connection_limits),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpxTransport":
        return cls(
            base_url=settings.ENDPOINT,
            timeout=settings.HTTP_TIMEOUT,
            connection_limits=httpx.Limits(
                max_keepalive_connections=settings.MAX_KEEPALIVE_CONNECTIONS,
                max_connections=settings.MAX_CONNECTIONS,
                keepalive_expiry=30.0,
            ),
        )

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, str]] = None,
        json: Optional[Any] = None,
    ) -> AttemptOutcome:
        client = self._get_client()

        try:
            async with client.stream(method, path, params=params, json=json) as response:
                try:
                    content = await response.aread()
                except httpx.RequestError as e:
                    # a success without its body is as good as no response
                    if response.is_success:
                        raise
                    logger.warning(
                        "Failed to read ScopeDB error body",
                        method=method,
                        path=path,
                        status_code=response.status_code,
                        error=str(e),
                    )
                    return HttpResponse(
                        status_code=response.status_code,
                        encoding=response.charset_encoding,
                        body_error=e,
                    )

                return HttpResponse(
                    status_code=response.status_code,
                    content=content,
                    encoding=response.charset_encoding,
                )

        except httpx.RequestError as e:
            logger.debug(
                "ScopeDB transport failure",
                method=method,
                path=path,
                error_type=type(e).__name__,
                error=str(e),
            )
            return TransportFailure(e)

    async def close(self) -> None:
        """Close the HTTP client connection."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed ScopeDB transport")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url}, timeout={self.timeout}s)"
