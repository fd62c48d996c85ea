"""Structured logging setup for the tolerance service."""

import json
import logging
import sys
from typing import Optional

# Structured fields emitted by the calculator and the API
STRUCTURED_FIELDS = [
    "mode",
    "nominal_size",
    "hole_grade",
    "shaft_grade",
    "fit_type",
    "error_code",
    "language",
    "latency_ms",
]


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        data = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        for attr in STRUCTURED_FIELDS:
            if hasattr(record, attr):
                data[attr] = getattr(record, attr)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


def setup_logging(level: Optional[str] = None, json_output: bool = True) -> None:
    root = logging.getLogger()
    root.setLevel((level or "INFO").upper())
    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.handlers = [handler]
