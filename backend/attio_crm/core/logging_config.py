"""
Logging configuration for applications using the Attio client.
The library itself only creates module loggers; call ``setup_logging`` from the
application entry point.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Request context attached through ``extra=``
        for key in ("method", "path", "status_code", "resource"):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data)


class DetailedFormatter(logging.Formatter):
    """Detailed human-readable formatter"""

    def __init__(self):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)-28s | %(funcName)-15s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


def setup_logging(level: Optional[str] = None, enable_json: bool = False) -> logging.Logger:
    """
    Configure console logging for the ``attio_crm`` logger tree.

    Args:
        level: Logging level name; defaults to ``ATTIO_LOG_LEVEL`` from settings
        enable_json: Emit one JSON document per record instead of plain text
    """
    if level is None:
        from attio_crm.core.config import get_settings
        level = get_settings().ATTIO_LOG_LEVEL

    logger = logging.getLogger("attio_crm")
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if enable_json else DetailedFormatter())
    logger.addHandler(handler)

    logger.info(f"Logging configured - Level: {level.upper()}, JSON: {enable_json}")
    return logger
