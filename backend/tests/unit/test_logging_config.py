"""Unit tests for structured JSON logging"""

import json
import sys
import logging

from config import Settings
from observability.logging_config import (
    JSONFormatter,
    RequestIDFilter,
    configure_logging,
    configure_logging_from_settings,
)
from observability.request_id import get_request_id, request_id_var


def _record(message="hello", **extra):
    record = logging.LogRecord(
        name="domain.validation.engine",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRequestId:
    """Test request ID context handling"""

    def test_default_request_id(self):
        token = request_id_var.set(None)
        try:
            assert get_request_id() == "no-request-id"
        finally:
            request_id_var.reset(token)

    def test_set_and_get(self):
        token = request_id_var.set("req-123")
        try:
            assert get_request_id() == "req-123"
        finally:
            request_id_var.reset(token)

    def test_filter_copies_request_id_onto_record(self):
        record = _record()
        token = request_id_var.set("req-123")
        try:
            assert RequestIDFilter().filter(record) is True
        finally:
            request_id_var.reset(token)

        assert record.request_id == "req-123"


class TestJSONFormatter:
    """Test JSON log line layout"""

    def test_formats_core_fields(self):
        record = _record()
        RequestIDFilter().filter(record)

        payload = json.loads(JSONFormatter().format(record))

        assert payload["level"] == "WARNING"
        assert payload["message"] == "hello"
        assert payload["logger"] == "domain.validation.engine"
        assert payload["timestamp"].endswith("Z")
        assert "request_id" in payload

    def test_includes_validation_extras(self):
        record = _record(operation_id="op-1", outcome="rejected", violation_count=2)

        payload = json.loads(JSONFormatter().format(record))

        assert payload["operation_id"] == "op-1"
        assert payload["outcome"] == "rejected"
        assert payload["violation_count"] == 2
        assert "field" not in payload

    def test_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        payload = json.loads(JSONFormatter().format(record))

        assert payload["error"] == "boom"
        assert "RuntimeError" in payload["traceback"]


class TestConfigureLogging:
    """Test root logger setup"""

    def test_installs_single_json_handler(self):
        root = logging.getLogger()
        previous_handlers, previous_level = list(root.handlers), root.level
        try:
            configure_logging(level="debug", json_format=True)

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JSONFormatter)
        finally:
            root.handlers[:] = previous_handlers
            root.setLevel(previous_level)

    def test_configure_from_settings_plain_format(self):
        root = logging.getLogger()
        previous_handlers, previous_level = list(root.handlers), root.level
        try:
            configure_logging_from_settings(Settings(LOG_LEVEL="WARNING", LOG_JSON=False))

            assert root.level == logging.WARNING
            assert not isinstance(root.handlers[0].formatter, JSONFormatter)
        finally:
            root.handlers[:] = previous_handlers
            root.setLevel(previous_level)
