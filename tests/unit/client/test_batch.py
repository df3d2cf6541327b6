"""
Unit tests for JsonRowsEncoder.
"""

import json
from datetime import datetime

import pytest

from scopedb_client.client.batch import JsonRowsEncoder
from scopedb_client.models.enums import IngestFormat


def test_rows_are_emitted_in_column_order():
    encoded = JsonRowsEncoder().encode([{"id": [1, 2], "name": ["a", "b"]}])

    assert encoded.splitlines() == ['{"id":1,"name":"a"}', '{"id":2,"name":"b"}']


def test_batches_are_concatenated():
    encoded = JsonRowsEncoder().encode([{"v": [1]}, {"v": [2, 3]}])

    assert [json.loads(line)["v"] for line in encoded.splitlines()] == [1, 2, 3]


def test_empty_input_encodes_to_empty_string():
    assert JsonRowsEncoder().encode([]) == ""
    assert JsonRowsEncoder().encode([{}]) == ""
    assert JsonRowsEncoder().encode([{"v": []}]) == ""


def test_non_json_values_are_stringified():
    encoded = JsonRowsEncoder().encode([{"ts": [datetime(2024, 5, 1, 12, 0)]}])

    assert json.loads(encoded) == {"ts": "2024-05-01 12:00:00"}


def test_nulls_are_preserved():
    assert JsonRowsEncoder().encode([{"v": [None]}]) == '{"v":null}'


def test_ragged_batch_rejected():
    with pytest.raises(ValueError, match="batch 1 has columns of unequal length"):
        JsonRowsEncoder().encode([{"a": [1]}, {"a": [1, 2], "b": [1]}])


def test_encoder_format():
    assert JsonRowsEncoder.format is IngestFormat.JSON
