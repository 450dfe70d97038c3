"""Logging formatters for file output."""

import json
import logging
from datetime import datetime

TEXT_FORMAT = "[%(asctime)s %(levelname)s %(name)s %(filename)s:%(lineno)d] %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format

        Returns
        -------
        str
            JSON document with timestamp, level, target, location and message
        """
        payload = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(timespec="seconds"),
            "level": record.levelname,
            "target": record.name,
            "file": record.filename,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload)


def build_formatter(log_format: str) -> logging.Formatter:
    """Return the formatter for a ``text`` or ``json`` log format."""
    if log_format.lower() == "json":
        return JsonFormatter()

    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)
