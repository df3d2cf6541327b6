"""
Columnar batch encoding for ingestion.

The ingest endpoint takes rows as one encoded string. A BatchEncoder turns
caller-supplied columnar batches into that string; the client only pairs
the result with a statement and sends it.
"""

import json
from typing import Any, Mapping, Protocol, Sequence

from scopedb_client.models.enums import IngestFormat

ColumnarBatch = Mapping[str, Sequence[Any]]


class BatchEncoder(Protocol):
    """Converts columnar batches into the ingest row encoding."""

    format: IngestFormat

    def encode(self, batches: Sequence[Any]) -> str:
        ...


class JsonRowsEncoder:
    """
    Newline-delimited JSON rows from column-oriented batches.

    Each batch maps column name -> column values; every column of a batch
    must have the same length. Each row becomes one JSON object.

    Example:
        >>> JsonRowsEncoder().encode([{"a": [1, 2], "b": ["x", "y"]}])
        '{"a":1,"b":"x"}\\n{"a":2,"b":"y"}'
    """

    format = IngestFormat.JSON

    def encode(self, batches: Sequence[ColumnarBatch]) -> str:
        lines: list[str] = []
        for index, batch in enumerate(batches):
            lines.extend(self._encode_batch(index, batch))
        return "\n".join(lines)

    @staticmethod
    def _encode_batch(index: int, batch: ColumnarBatch) -> list[str]:
        columns = list(batch.keys())
        if not columns:
            return []

        lengths = {name: len(batch[name]) for name in columns}
        num_rows = lengths[columns[0]]
        if any(length != num_rows for length in lengths.values()):
            raise ValueError(f"batch {index} has columns of unequal length: {lengths}")

        return [
            json.dumps(
                {name: batch[name][row] for name in columns},
                separators=(",", ":"),
                default=str,
            )
            for row in range(num_rows)
        ]
