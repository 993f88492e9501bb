"""Logging setup for the application.

Configures the root logger once at startup from ``LOG_LEVEL`` and
``LOG_FORMAT``. Modules obtain their own logger with
``logging.getLogger(__name__)``.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from app.core.config import settings

_configured = False


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def init_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure the root logger.

    Args:
        level: Log level name, defaults to settings.LOG_LEVEL
        fmt: "json" or "text", defaults to settings.LOG_FORMAT
    """
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    if (fmt or settings.LOG_FORMAT) == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        handlers=[handler],
        force=True,
    )
    # SQL echo is controlled by DEBUG, not by the app log level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _configured = True
