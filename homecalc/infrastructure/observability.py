"""Structured Logging: one JSON object per record for the AI flows.

Invariants:
    - Every record carries timestamp (record time, UTC), level, logger, message
    - Flow fields passed via extra= (flow, tool_name, round_number, token
      counts, latency_ms, ...) are copied only when set
    - setup_logging replaces the handler it installed before; calling it twice
      never duplicates output

Design Decisions:
    - httpx and anthropic loggers held at WARNING: per-request INFO lines from
      the SDKs duplicate the invoker's own usage log
"""

import json
import logging
from datetime import datetime, timezone

FLOW_FIELDS = (
    "flow", "tool_name", "round_number", "error_code",
    "input_tokens", "output_tokens", "latency_ms", "result_count", "path",
)

_NOISY_LOGGERS = ("httpx", "anthropic")
_HANDLER_NAME = "homecalc"


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (name, getattr(record, name)) for name in FLOW_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the homecalc handler on the root logger (json or text)."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    )
    root.addHandler(handler)
    root.setLevel(level.upper() if level.upper() in logging.getLevelNamesMapping() else "INFO")
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
