"""
Response bodies returned by the ScopeDB HTTP API.

Only ``status`` matters to the retry machinery; the remaining fields are
carried through to the caller. Unknown fields are ignored so newer servers
do not break older clients.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from scopedb_client.models.codec import wire_enum
from scopedb_client.models.enums import ResultFormat, StatementStatus


class _ResponseModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class StatementProgress(_ResponseModel):
    total_percentage: float = Field(default=0.0, ge=0.0, le=100.0)
    nanos_from_submitted: int = Field(default=0, ge=0)
    nanos_from_started: int = Field(default=0, ge=0)


class FieldSchema(_ResponseModel):
    name: str
    data_type: str


class ResultSetMetadata(_ResponseModel):
    fields: list[FieldSchema] = Field(default_factory=list)
    num_rows: int = Field(default=0, ge=0)


class ResultSet(_ResponseModel):
    """
    Rows produced by a finished statement.

    ``rows`` is a list of row arrays for the JSON format and an encoded
    string for the Arrow format.
    """

    metadata: ResultSetMetadata = Field(default_factory=ResultSetMetadata)
    format: wire_enum(ResultFormat) = Field(default=ResultFormat.JSON)
    rows: Any = None


class StatementResponse(_ResponseModel):
    """Body of ``POST /v1/statements`` and ``GET /v1/statements/{id}``."""

    statement_id: str = Field(..., min_length=1)
    status: wire_enum(StatementStatus)
    created_at: Optional[str] = Field(default=None, description="ISO timestamp from server")
    progress: Optional[StatementProgress] = None
    result_set: Optional[ResultSet] = None
    message: Optional[str] = Field(
        default=None, description="Server-side failure description for FAILED statements"
    )

    @property
    def is_finished(self) -> bool:
        return self.status is StatementStatus.FINISHED


class IngestResponse(_ResponseModel):
    """Body of ``POST /v1/ingest``."""

    num_rows_inserted: int = Field(default=0, ge=0)
