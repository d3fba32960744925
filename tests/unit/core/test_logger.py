"""
Unit tests for the shared logging helpers.
"""

import json
import logging

import pytest

from app.core.shared.logger import (
    ColoredFormatter,
    CorrelationIdFilter,
    JSONFormatter,
    configure_logging,
    correlation_id_var,
    mask_insured_id,
    mask_pii,
)


def _record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("app.test", logging.INFO, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestMasking:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("12345", "12***"), ("123", "***"), ("", "***"), (None, "***")],
    )
    def test_mask_insured_id(self, raw, expected):
        assert mask_insured_id(raw) == expected

    def test_mask_pii_nested(self):
        data = {"insuredId": "00123", "items": [{"insured_id": "54321", "scheduleId": 100}]}

        assert mask_pii(data) == {"insuredId": "00***", "items": [{"insured_id": "54***", "scheduleId": 100}]}
        assert data["insuredId"] == "00123"


@pytest.mark.unit
class TestJSONFormatter:
    def test_fields(self):
        formatter = JSONFormatter(service_name="svc", environment="test")

        data = json.loads(formatter.format(_record(correlation_id="abc")))

        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["service"] == "svc"
        assert data["environment"] == "test"
        assert data["correlation_id"] == "abc"

    def test_extra_data_is_masked(self):
        formatter = JSONFormatter()

        data = json.loads(formatter.format(_record(extra_data={"insuredId": "00123"})))

        assert data["extra"] == {"insuredId": "00***"}


@pytest.mark.unit
def test_correlation_filter_uses_context():
    token = correlation_id_var.set("req-1")
    try:
        record = _record()
        assert CorrelationIdFilter().filter(record) is True
    finally:
        correlation_id_var.reset(token)

    assert record.correlation_id == "req-1"


@pytest.mark.unit
def test_colored_formatter_leaves_record_untouched():
    record = _record()

    output = ColoredFormatter("%(levelname)s %(message)s").format(record)

    assert "hello" in output
    assert record.levelname == "INFO"


@pytest.mark.unit
def test_configure_logging_installs_single_handler():
    root = logging.getLogger()
    previous_handlers, previous_level = root.handlers[:], root.level
    try:
        configure_logging(level="debug", json_format=True)
        configure_logging(level="debug", json_format=True)

        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
