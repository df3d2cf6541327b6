"""
Data models for the ScopeDB client.

Includes:
- Enums (StatementStatus, ResultFormat, IngestFormat) and their wire names
- Request models (StatementRequest, FetchStatementParams, IngestRequest)
- Response models (StatementResponse, IngestResponse, ResultSet)
- Attempt outcomes (TransportFailure, HttpResponse)
"""

from scopedb_client.models.codec import from_wire, to_wire, wire_enum, wire_names
from scopedb_client.models.enums import IngestFormat, ResultFormat, StatementStatus
from scopedb_client.models.outcomes import AttemptOutcome, HttpResponse, TransportFailure
from scopedb_client.models.requests import (
    FetchStatementParams,
    IngestData,
    IngestRequest,
    StatementRequest,
)
from scopedb_client.models.responses import (
    FieldSchema,
    IngestResponse,
    ResultSet,
    ResultSetMetadata,
    StatementProgress,
    StatementResponse,
)

__all__ = [
    # Codec
    "wire_names",
    "wire_enum",
    "to_wire",
    "from_wire",
    # Enums
    "StatementStatus",
    "ResultFormat",
    "IngestFormat",
    # Outcomes
    "AttemptOutcome",
    "HttpResponse",
    "TransportFailure",
    # Requests
    "StatementRequest",
    "FetchStatementParams",
    "IngestData",
    "IngestRequest",
    # Responses
    "StatementResponse",
    "StatementProgress",
    "ResultSet",
    "ResultSetMetadata",
    "FieldSchema",
    "IngestResponse",
]
