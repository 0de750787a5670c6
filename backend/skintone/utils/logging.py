"""
SkinTone Structured Logging
Service-wide loguru sink with per-call context fields.
"""
import sys
from typing import Any, Dict, Optional

from loguru import logger

from skintone.config import config

TEXT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message} | {extra}"


class StructuredLogger:
    """
    Thin facade over loguru for request-scoped log lines.

    Context passed as ``extra`` is bound onto the record, so it shows up in
    the text format and as fields when JSON output is enabled.
    """

    def __init__(self, level: Optional[str] = None, json_output: Optional[bool] = None):
        self.level = (level or config.LOG_LEVEL).upper()
        self.json_output = config.LOG_JSON if json_output is None else json_output
        self._context: Dict[str, Any] = {}
        self._configure_sink()

    def _configure_sink(self):
        # Replace loguru's default stderr handler with a single stdout sink
        logger.remove()
        logger.add(
            sys.stdout,
            level=self.level,
            format=TEXT_FORMAT,
            serialize=self.json_output,
        )

    def bind(self, **context: Any) -> "StructuredLogger":
        """Child logger that adds context to every record it emits."""
        child = StructuredLogger.__new__(StructuredLogger)
        child.level = self.level
        child.json_output = self.json_output
        child._context = {**self._context, **context}
        return child

    def _log(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        fields = {**self._context, **(extra or {})}
        # depth=2 attributes the record to the caller, not this facade
        logger.bind(**fields).opt(depth=2).log(level, message)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("DEBUG", message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("ERROR", message, extra)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create the service logger."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
