"""
Structured Logging for SuperStudy.

Every record is emitted as one JSON object per line. Keyword fields passed to
``ComponentLogger`` become top-level keys; credential-looking fields are
masked before they reach the output.
"""

import json
import logging
import sys
from datetime import datetime, timezone

LOGGER_NAME = "SuperStudy"
DEFAULT_COMPONENT = "gateway"
REDACTED = "[redacted]"

# Field names that carry credentials
SECRET_FIELDS = frozenset({"api_key", "authorization", "password", "secret"})

# Attributes every LogRecord carries, plus the ones Formatter adds lazily
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def is_secret_field(name: str) -> bool:
    lowered = name.lower()
    return lowered in SECRET_FIELDS or lowered.endswith("_api_key")


def _json_safe(value):
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        # Enums, exceptions and the like
        return str(value)
    return value


class JsonFormatter(logging.Formatter):
    """Render a record with its caller-supplied fields as a JSON line."""

    def format(self, record):
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "component": getattr(record, "component", DEFAULT_COMPONENT),
            "message": record.getMessage(),
            "module": record.module,
        }

        fields = sorted(
            name for name in record.__dict__.keys() - _RECORD_ATTRS
            if not name.startswith("_") and name != "component"
        )
        for name in fields:
            if is_secret_field(name):
                payload[name] = REDACTED
            else:
                payload[name] = _json_safe(getattr(record, name))

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload)


# Configure package logger
logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(logging.INFO)
handler = logging.StreamHandler(sys.stdout)
handler.setFormatter(JsonFormatter())
logger.addHandler(handler)


class ComponentLogger:
    """Adds the component name and keyword fields to every record."""

    def __init__(self, component):
        self.component = component
        self.logger = logging.getLogger(LOGGER_NAME)

    def _log(self, level, msg, fields):
        self.logger.log(level, msg, extra={"component": self.component, **fields})

    def debug(self, msg, **kwargs):
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg, **kwargs):
        self._log(logging.INFO, msg, kwargs)

    def warning(self, msg, **kwargs):
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg, **kwargs):
        self._log(logging.ERROR, msg, kwargs)


def get_logger(component: str = DEFAULT_COMPONENT):
    return ComponentLogger(component)
