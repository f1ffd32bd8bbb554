"""
ETFI Logging

All diagnostics go through the "etfi" logger hierarchy. Engine modules only
call logging.getLogger(__name__); handlers are installed here by the CLI and
the API on startup.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from .config import Settings

LOGGER_NAME = "etfi"

# Extra attributes copied into JSON log lines when present on the record
_EXTRA_FIELDS = ("modifier_id", "rule_id", "requirement_set_id", "requirement_id", "status")


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Install a single stream handler on the "etfi" logger.

    Calling this repeatedly replaces the handler rather than stacking them.
    """
    settings = settings or Settings()
    logger = logging.getLogger(LOGGER_NAME)

    for existing in list(logger.handlers):
        if getattr(existing, "_etfi_handler", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._etfi_handler = True
    if settings.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, settings.log_level.upper()))
    return logger
