"""
colorpalette Structured Logging
Configures the loguru sink and binds request fields onto API log lines.
"""
import sys
from typing import Any, Dict, Optional

from loguru import logger

from colorpalette.config import config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}"


class StructuredLogger:
    """Single stdout sink; request fields travel in loguru's ``extra``."""

    def __init__(self, level: Optional[str] = None):
        self.level = level or config.LOG_LEVEL
        self._configure_logger()

    def _configure_logger(self):
        # Replace loguru's default stderr handler
        logger.remove()
        logger.add(sys.stdout, format=LOG_FORMAT, level=self.level, serialize=False)

    def _log(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        logger.bind(**(extra or {})).log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log an info message with request fields bound."""
        self._log("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log a rejected or degraded request."""
        self._log("WARNING", message, extra)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create global logger instance."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger


def log_request(request_id: str, action: str, **fields: Any):
    """Log one API action with its request id bound."""
    get_logger().info(f"{action} request", extra={"request_id": request_id, "action": action, **fields})
