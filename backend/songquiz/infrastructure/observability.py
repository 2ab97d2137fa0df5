"""Structured Logging — one JSON object per line in production, plain text locally.

Invariants:
    - Every line carries timestamp, level, logger, message
    - Quiz context passed via extra= (quiz_id, user_id, submission_id,
      target_status, error_code, path, status) is surfaced when present
    - setup_logging is idempotent: calling it again replaces its own handler

Design Decisions:
    - Own JSONFormatter instead of a logging library: the payload is a flat dict
    - SQLAlchemy engine and uvicorn access logs held at WARNING; request
      outcomes are already logged by the error handlers and services
"""

import json
import logging
from datetime import datetime, timezone


CONTEXT_FIELDS = (
    "quiz_id", "user_id", "submission_id", "target_status",
    "error_code", "path", "status",
)
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
_QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")
_HANDLER_NAME = "songquiz"


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, record.__dict__[key])
            for key in CONTEXT_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
