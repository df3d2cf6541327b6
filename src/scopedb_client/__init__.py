"""
Asynchronous Python client for ScopeDB.

Submits statements, polls them to completion and ingests batched data over
the ScopeDB HTTP API, retrying transient network failures with jittered
delays under a wall-clock deadline.

Architecture: httpx transport + retry policy/executor + response resolver
"""

from scopedb_client.client import (
    DecodeError,
    RemoteError,
    ScopeDBClient,
    ScopeDBError,
    TransportError,
)
from scopedb_client.models import (
    FetchStatementParams,
    IngestResponse,
    ResultFormat,
    StatementRequest,
    StatementResponse,
    StatementStatus,
)
from scopedb_client.retry import RetryPolicy

__version__ = "0.1.0"

__all__ = [
    "ScopeDBClient",
    "RetryPolicy",
    "StatementRequest",
    "StatementResponse",
    "StatementStatus",
    "FetchStatementParams",
    "ResultFormat",
    "IngestResponse",
    "ScopeDBError",
    "TransportError",
    "RemoteError",
    "DecodeError",
]
