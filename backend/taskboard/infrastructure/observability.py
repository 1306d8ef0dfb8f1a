"""Structured Logging - one JSON line per record, tagged with request identities.

Invariants:
    - Every line carries timestamp, level, logger and message
    - user_id / project_id / task_id / error_code / path appear only when the
      call site passed them in `extra`, always as strings (UUIDs included)
    - setup_logging owns the root handler: calling it again replaces the
      previous handler instead of stacking a second one
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = ("user_id", "project_id", "task_id", "error_code", "path")

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_HANDLER_NAME = "taskboard"


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, str(getattr(record, key)))
            for key in EXTRA_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the taskboard handler on the root logger ("json" or "text")."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
