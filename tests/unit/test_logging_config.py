"""
Unit tests for the opt-in structlog setup.
"""

import json
import logging

import pytest
import structlog

from scopedb_client.client import orchestrator
from scopedb_client.client.exceptions import RemoteError
from scopedb_client.client.orchestrator import ScopeDBClient
from scopedb_client.logging_config import (
    HANDLER_NAME,
    LOGGER_NAME,
    configure_logging,
    endpoint_context,
    error_fields,
)


@pytest.fixture(autouse=True)
def restore_logging():
    watched = [logging.getLogger(name) for name in (LOGGER_NAME, "httpx", "httpcore")]
    saved = [(lg, list(lg.handlers), lg.level, lg.propagate) for lg in watched]
    yield
    structlog.reset_defaults()
    for lg, handlers, level, propagate in saved:
        lg.handlers[:] = handlers
        lg.setLevel(level)
        lg.propagate = propagate


def test_endpoint_context_stamps_events():
    add = endpoint_context("http://scopedb.test:6543")

    event = add(None, "info", {"event": "hello"})

    assert event == {"event": "hello", "client": "scopedb", "endpoint": "http://scopedb.test:6543"}


def test_endpoint_context_keeps_explicit_fields():
    event = endpoint_context("http://a")(None, "info", {"event": "x", "endpoint": "http://b"})

    assert event["endpoint"] == "http://b"


def test_error_fields_flatten_client_errors():
    error = RemoteError(404, "statement not found")

    event = error_fields(None, "debug", {"event": "failed", "exc_info": error})

    assert event["error_kind"] == "remote"
    assert event["error_details"]["status_code"] == 404


def test_error_fields_ignore_other_exceptions():
    event = error_fields(None, "debug", {"event": "failed", "exc_info": KeyError("x")})

    assert "error_kind" not in event


def test_handler_goes_on_client_logger_only(test_settings):
    root_handlers = list(logging.getLogger().handlers)

    configure_logging(test_settings)
    configure_logging(test_settings)

    client_logger = logging.getLogger(LOGGER_NAME)
    installed = [h for h in client_logger.handlers if h.get_name() == HANDLER_NAME]
    assert len(installed) == 1
    assert isinstance(installed[0].formatter, structlog.stdlib.ProcessorFormatter)
    assert client_logger.level == logging.DEBUG
    assert client_logger.propagate is False
    assert logging.getLogger().handlers == root_handlers


@pytest.mark.parametrize("level,http_level", [("DEBUG", logging.DEBUG), ("INFO", logging.WARNING)])
def test_http_stack_quieted_unless_debugging(test_settings, level, http_level):
    configure_logging(test_settings.model_copy(update={"LOG_LEVEL": level}))

    assert logging.getLogger("httpx").level == http_level
    assert logging.getLogger("httpcore").level == http_level


def test_unknown_level_falls_back_to_info(test_settings):
    configure_logging(test_settings.model_copy(update={"LOG_LEVEL": "chatty"}))

    assert logging.getLogger(LOGGER_NAME).level == logging.INFO


def test_production_renders_json(test_settings, capsys):
    configure_logging(test_settings.model_copy(update={"ENVIRONMENT": "production"}))

    structlog.get_logger("scopedb_client.retry.engine").warning(
        "Retry budget exhausted", attempts=3, exc_info=RemoteError(503, "busy")
    )

    line = capsys.readouterr().out.strip().splitlines()[-1]
    event = json.loads(line)
    assert event["event"] == "Retry budget exhausted"
    assert event["attempts"] == 3
    assert event["client"] == "scopedb"
    assert event["endpoint"] == "http://localhost:6543"
    assert event["error_kind"] == "remote"
    assert event["level"] == "warning"


@pytest.mark.parametrize("enabled", [True, False])
def test_from_settings_configures_logging_on_request(test_settings, monkeypatch, enabled):
    seen = []
    monkeypatch.setattr(orchestrator, "configure_logging", seen.append)
    settings = test_settings.model_copy(update={"CONFIGURE_LOGGING": enabled})

    ScopeDBClient.from_settings(settings)

    assert seen == ([settings] if enabled else [])
