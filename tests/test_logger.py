"""日志上下文测试。"""

import json
import logging

from app.packages.catalog.core.logger import (
    JsonFormatter,
    LogContextFilter,
    get_request_id,
    get_scan_id,
    scan_context,
    set_request_id,
)


def _record(msg="scan.start"):
    return logging.LogRecord("app", logging.INFO, __file__, 1, msg, None, None)


def test_scan_context_binds_and_restores_scan_id():
    assert get_scan_id() is None
    with scan_context("abc123") as scan_id:
        assert scan_id == "abc123"
        assert get_scan_id() == "abc123"
        with scan_context() as nested:
            assert len(nested) == 8
            assert get_scan_id() == nested
        assert get_scan_id() == "abc123"
    assert get_scan_id() is None


def test_context_filter_and_json_formatter():
    set_request_id("req-1")
    try:
        record = _record()
        with scan_context("s1"):
            assert LogContextFilter().filter(record)
        payload = json.loads(JsonFormatter().format(record))
    finally:
        set_request_id(None)

    assert payload["msg"] == "scan.start"
    assert payload["request_id"] == "req-1"
    assert payload["scan_id"] == "s1"
    assert get_request_id() is None


def test_filter_uses_placeholder_outside_scan():
    record = _record()
    LogContextFilter().filter(record)
    assert record.scan_id == "-"
