# wrappy/core/logging/formatters.py
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from .context import getLogContext

# Context keys shown by the console formatter, in display order
DEV_CONTEXT_KEYS = ("command", "container")



class JsonFormatter(logging.Formatter):
    """One JSON object per line, for the log file."""
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            "context": getLogContext() or {},
            "pid": record.process,
        }
        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
            entry["error"] = {
                "type": type(error).__name__,
                "message": str(error),
                "traceback": self.formatException(record.exc_info),
            }
        return json.dumps(entry, ensure_ascii=False, default=str, separators=(",", ":"))



class DevFormatter(logging.Formatter):
    """`LEVEL: [logger] message [command/container]` for the terminal."""
    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname}: [{record.name}] {record.getMessage()}"

        context = getLogContext() or {}
        tags = [str(context[key]) for key in DEV_CONTEXT_KEYS if context.get(key)]
        if tags:
            line += f" [{'/'.join(tags)}]"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line
