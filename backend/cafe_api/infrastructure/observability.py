"""Logging setup: one stdout handler, JSON lines in production, plain text locally.

Cafe fields passed through ``extra=`` (cafe_id, title_filter, result_count,
error_code, path) become top-level keys of each JSON line.
"""

import json
import logging
from datetime import datetime, timezone

CAFE_LOG_FIELDS = (
    "cafe_id", "title_filter", "result_count", "error_code", "path",
)
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (name, getattr(record, name))
            for name in CAFE_LOG_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


_HANDLER_NAME = "cafe_api"


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the cafe_api handler on the root logger; safe to call twice."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
