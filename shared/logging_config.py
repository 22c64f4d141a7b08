"""
Centralized JSON logging for the translator bot components
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Dict

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, component, level, event and fields"""

    def __init__(self, component: str):
        super().__init__()
        self.component = component

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "component": self.component,
            "level": record.levelname,
            "event": record.getMessage(),
        }
        entry.update(getattr(record, "fields", {}))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class StructuredLogger:
    """Logs snake_case event names with keyword fields"""

    def __init__(self, component: str):
        self.component = component
        self.logger = logging.getLogger(f"translator-bot.{component}")
        self.logger.setLevel(LOG_LEVEL)
        self.logger.propagate = False
        self.logger.handlers = []

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter(component))
        self.logger.addHandler(handler)

    def _log(self, level: int, event: str, exc_info=None, **fields):
        self.logger.log(level, event, exc_info=exc_info, extra={"fields": fields})

    def debug(self, event: str, **fields):
        self._log(logging.DEBUG, event, **fields)

    def info(self, event: str, **fields):
        self._log(logging.INFO, event, **fields)

    def warning(self, event: str, **fields):
        self._log(logging.WARNING, event, **fields)

    def error(self, event: str, exc_info=None, **fields):
        self._log(logging.ERROR, event, exc_info=exc_info, **fields)


_loggers: Dict[str, StructuredLogger] = {}


def get_logger(component: str) -> StructuredLogger:
    """Get the structured logger for a component, creating it once"""
    if component not in _loggers:
        _loggers[component] = StructuredLogger(component)
    return _loggers[component]
