"""One-line JSON log output for the account service."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

# Extra fields masked no matter which caller passes them
_REDACTED_KEYS = {'password', 'password_hash', 'token', 'authorization'}

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', (), None))) | {'message', 'taskName'}


class JSONFormatter(logging.Formatter):
    """Render a record and its extra= fields as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        for key, value in vars(record).items():
            if key in _RECORD_ATTRS or callable(value):
                continue
            entry[key] = "***" if key.lower() in _REDACTED_KEYS else value

        return json.dumps(entry, default=str)


def setup_structured_logging(level: int = logging.INFO):
    """Route the root logger and uvicorn's access log through JSONFormatter.

    Access logging drops to WARNING; request outcomes are logged by the auth service.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    access = logging.getLogger("uvicorn.access")
    access.handlers = [handler]
    access.setLevel(logging.WARNING)
