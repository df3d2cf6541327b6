"""
ScopeDB client and its collaborators.

Components:
- ScopeDBClient: submit / fetch / ingest with retries and polling
- HttpTransport, HttpxTransport: one-attempt HTTP execution
- ResponseResolver: outcome -> value or classified error
- BatchEncoder, JsonRowsEncoder: columnar batch -> ingest rows
- exceptions: ScopeDBError and its Transport/Remote/Decode subclasses
"""

from scopedb_client.client.batch import BatchEncoder, JsonRowsEncoder
from scopedb_client.client.exceptions import (
    DecodeError,
    RemoteError,
    ScopeDBError,
    TransportError,
)
from scopedb_client.client.orchestrator import ScopeDBClient
from scopedb_client.client.resolver import ResponseResolver
from scopedb_client.client.transport import HttpTransport, HttpxTransport

__all__ = [
    "ScopeDBClient",
    "HttpTransport",
    "HttpxTransport",
    "ResponseResolver",
    "BatchEncoder",
    "JsonRowsEncoder",
    "ScopeDBError",
    "TransportError",
    "RemoteError",
    "DecodeError",
]
