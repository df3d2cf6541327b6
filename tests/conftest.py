"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
from typing import Any

import pytest

from scopedb_client.config import Settings
from scopedb_client.models.outcomes import HttpResponse


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with the production retry defaults.

    Unit tests drive time with a fake clock, so the real 1s / 60s values
    cost nothing. Override specific settings in individual tests as needed:
        def test_something(test_settings):
            settings = test_settings.model_copy(update={"RETRY_MAX_ELAPSED": 5.0})
    """
    return Settings(
        ENDPOINT="http://localhost:6543",
        HTTP_TIMEOUT=5.0,
        RETRY_BASE_DELAY=1.0,
        RETRY_JITTER=0.15,
        RETRY_MAX_ELAPSED=60.0,
        RETRY_MAX_ATTEMPTS=None,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
    )


@pytest.fixture
def json_response():
    """Factory fixture building an HttpResponse with a JSON body.

    Usage:
        def test_something(json_response):
            response = json_response(200, {"num_rows_inserted": 3})
    """

    def _create(status_code: int, payload: Any) -> HttpResponse:
        return HttpResponse(
            status_code=status_code,
            content=json.dumps(payload).encode("utf-8"),
            encoding="utf-8",
        )

    return _create


@pytest.fixture
def statement_response():
    """Factory fixture building a 200 statement response with a given status.

    Usage:
        def test_something(statement_response):
            running = statement_response("running")
    """

    def _create(
        status: str,
        statement_id: str = "stmt-0001",
        status_code: int = 200,
        **fields: Any,
    ) -> HttpResponse:
        payload = {"statement_id": statement_id, "status": status, **fields}
        return HttpResponse(
            status_code=status_code,
            content=json.dumps(payload).encode("utf-8"),
            encoding="utf-8",
        )

    return _create
