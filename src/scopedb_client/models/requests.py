"""
Request bodies and parameters sent to the ScopeDB HTTP API.

Enum fields serialize by wire name; call ``to_body()`` for the JSON-ready
dict that goes on the wire.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from scopedb_client.models.codec import to_wire, wire_enum
from scopedb_client.models.enums import IngestFormat, ResultFormat


class _RequestModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    def to_body(self) -> dict[str, Any]:
        """JSON-ready body, omitting unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


class StatementRequest(_RequestModel):
    """Body of ``POST /v1/statements``."""

    statement: str = Field(..., min_length=1, description="Statement text to execute")
    format: wire_enum(ResultFormat) = Field(
        default=ResultFormat.JSON, description="Encoding of the result rows"
    )
    exec_timeout: Optional[str] = Field(
        default=None,
        description="Server-side execution timeout as a duration string, e.g. '60s'",
    )


class FetchStatementParams(_RequestModel):
    """Address of a submitted statement plus the result format to fetch it in."""

    statement_id: str = Field(..., min_length=1, description="Handle returned by submit")
    format: wire_enum(ResultFormat) = Field(default=ResultFormat.JSON)

    def query_params(self) -> dict[str, str]:
        """Query string for ``GET /v1/statements/{statement_id}``."""
        return {"format": to_wire(self.format)}


class IngestData(_RequestModel):
    """Encoded rows of an ingest request."""

    format: wire_enum(IngestFormat) = Field(default=IngestFormat.JSON)
    rows: str = Field(..., description="Row-encoded batch payload")


class IngestRequest(_RequestModel):
    """Body of ``POST /v1/ingest``."""

    data: IngestData
    statement: str = Field(
        ..., min_length=1, description="Statement the ingested rows are fed into"
    )
