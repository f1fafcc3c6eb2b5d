"""
Logging setup for scripts.

Library modules only create loggers (logging.getLogger(__name__)); handlers
are configured here, once, by whatever entry point is running.
"""

import json
import logging
from typing import Optional

from matchfinder.config import Settings, get_settings

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(config: Optional[Settings] = None) -> None:
    """Configure the root logger from settings (level and console/json format)."""
    config = config or get_settings()

    handler = logging.StreamHandler()
    if config.log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    logging.basicConfig(level=config.log_level, handlers=[handler], force=True)
