"""Structured logging tests: JSON fields and idempotent setup."""

import json
import logging

from homecalc.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        "homecalc.services.tool_dispatch", logging.INFO, __file__, 1,
        "Tool executed", None, None,
    )
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_json_includes_set_flow_fields_only():
    line = JSONFormatter().format(_record(flow="assistant", latency_ms=12, tool_name=None))
    entry = json.loads(line)
    assert entry["message"] == "Tool executed"
    assert entry["flow"] == "assistant"
    assert entry["latency_ms"] == 12
    assert "tool_name" not in entry


def test_setup_logging_twice_installs_one_handler():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        setup_logging("debug", "text")
        setup_logging("INFO", "json")
        ours = [h for h in root.handlers if h.get_name() == "homecalc"]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, JSONFormatter)
        assert root.level == logging.INFO
    finally:
        for h in list(root.handlers):
            if h not in before:
                root.removeHandler(h)
        root.setLevel(level)
