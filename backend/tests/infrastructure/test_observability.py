"""Structured Logging — verifies JSON output and handler replacement."""

import json
import logging

from cognicare.infrastructure import observability
from cognicare.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("cognicare.test", logging.WARNING, __file__, 1, "hola %s", ("mundo",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_known_extras():
    line = JSONFormatter().format(_record(path="/api/facultades", status_code=401, ignored="x"))
    log = json.loads(line)
    assert log["message"] == "hola mundo"
    assert log["level"] == "WARNING"
    assert log["path"] == "/api/facultades"
    assert log["status_code"] == 401
    assert "ignored" not in log


def test_json_formatter_keeps_non_ascii():
    line = JSONFormatter().format(_record(operation="sesión"))
    assert "sesión" in line


def test_setup_logging_replaces_previous_handler():
    if observability._handler is not None:
        logging.root.removeHandler(observability._handler)
        observability._handler = None
    before = len(logging.root.handlers)
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    assert len(logging.root.handlers) == before + 1
    assert logging.root.level == logging.INFO
    assert not isinstance(observability._handler.formatter, JSONFormatter)
    logging.root.removeHandler(observability._handler)
    observability._handler = None
