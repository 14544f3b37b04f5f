"""
Logger for inventory sync operations.

Wraps structlog on top of the standard logging module so records can be
rendered either as console text or as JSON lines, and so that context
such as the sync round id can be bound once and carried on every event.
"""

import logging
import sys
from typing import Any, Dict, Optional

import structlog

from inventory_sync.config.models import LoggingConfig


class SyncLogger:
    """Structured logger with a stdlib-like call surface."""

    def __init__(self, name: str = "inventory_sync", bound_logger=None):
        """
        Initialize the logger.

        Args:
            name: Name of the underlying stdlib logger
            bound_logger: Existing structlog logger to wrap (used by bind)
        """
        self.name = name
        self._logger = bound_logger or structlog.get_logger(name)

    def setup_logging(self, config: LoggingConfig) -> None:
        """
        Configure handlers, level and rendering from configuration.

        Args:
            config: LoggingConfig with level, format and optional log file
        """
        shared_processors = [
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
        ]

        if config.format == "json":
            final_processors = [
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ]
        else:
            final_processors = [structlog.dev.ConsoleRenderer(colors=False)]

        formatter = structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *final_processors,
            ],
        )

        handlers = [logging.StreamHandler(sys.stdout)]
        if config.log_to_file and config.log_file_path:
            handlers.append(logging.FileHandler(config.log_file_path))

        std_logger = logging.getLogger(self.name)
        for handler in list(std_logger.handlers):
            std_logger.removeHandler(handler)
        for handler in handlers:
            handler.setFormatter(formatter)
            std_logger.addHandler(handler)
        std_logger.setLevel(config.level)
        std_logger.propagate = False

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                *shared_processors,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.StackInfoRenderer(),
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )
        self._logger = structlog.get_logger(self.name)

    def bind(self, **context: Any) -> "SyncLogger":
        """Return a logger that adds the given context to every event."""
        return SyncLogger(self.name, self._logger.bind(**context))

    def _log(
        self,
        level: str,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False,
    ) -> None:
        fields = dict(extra or {})
        if exc_info:
            fields["exc_info"] = True
        getattr(self._logger, level)(message, **fields)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self._log("debug", message, extra, exc_info)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self._log("info", message, extra, exc_info)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self._log("warning", message, extra, exc_info)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self._log("error", message, extra, exc_info)
