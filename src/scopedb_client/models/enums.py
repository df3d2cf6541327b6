"""
Enumerations carried in ScopeDB requests and responses.

Wire spellings are declared with ``wire_names``; see models.codec.
"""

from enum import Enum, auto

from scopedb_client.models.codec import wire_names


@wire_names(
    QUEUED="queued",
    RUNNING="running",
    FINISHED="finished",
    FAILED="failed",
)
class StatementStatus(Enum):
    """
    Lifecycle status of a submitted statement.

    FINISHED and FAILED are terminal. A FAILED status is returned to the
    caller as an ordinary response, not raised.
    """

    QUEUED = auto()
    RUNNING = auto()
    FINISHED = auto()
    FAILED = auto()

    @property
    def is_finished(self) -> bool:
        return self is StatementStatus.FINISHED

    @property
    def is_terminal(self) -> bool:
        return self in (StatementStatus.FINISHED, StatementStatus.FAILED)


@wire_names(JSON="json", ARROW="arrow")
class ResultFormat(Enum):
    """Encoding of the rows in a statement result set."""

    JSON = auto()
    ARROW = auto()


@wire_names(JSON="json")
class IngestFormat(Enum):
    """Encoding of the rows carried by an ingest request."""

    JSON = auto()
