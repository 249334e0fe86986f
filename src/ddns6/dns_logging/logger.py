"""
Structured Logging Framework

This module provides the logging infrastructure using structlog on top of the
standard library, with console or JSON output and an optional rotating file.
"""

import logging
import logging.handlers
import sys
import traceback
from pathlib import Path
from typing import List, Optional

import structlog

from ..config.schema import LoggingConfig

# Processors shared by structlog events and foreign stdlib records
SHARED_PROCESSORS = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
]


class StructuredLogger:
    """Structured logger using structlog with console or JSON formatting."""

    def __init__(self, config: LoggingConfig):
        """Initialize structured logger.

        Args:
            config: Logging configuration
        """
        self.config = config
        self._configured = False
        self.logger = None
        self.handlers: List[logging.Handler] = []

    def configure(self) -> None:
        """Configure structlog and attach handlers to the root logger."""
        if self._configured:
            return

        log_level = getattr(logging, self.config.level.upper())

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(log_level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(self._create_formatter(self.config.format))
        root_logger.addHandler(console_handler)
        self.handlers.append(console_handler)

        if self.config.file:
            self._setup_file_logging(log_level)

        structlog.configure(
            processors=SHARED_PROCESSORS
            + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        self._configured = True
        self.logger = structlog.get_logger("ddns6")

    def _create_formatter(self, fmt: str) -> logging.Formatter:
        """Create a ProcessorFormatter rendering either JSON or console text."""
        if fmt == "json":
            renderers = [
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ]
        else:
            # ConsoleRenderer formats exc_info itself
            renderers = [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]

        return structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=SHARED_PROCESSORS,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta]
            + renderers,
        )

    def _setup_file_logging(self, log_level: int) -> None:
        """Setup rotating file logging, always in JSON format."""
        log_path = Path(self.config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=self.config.file,
            maxBytes=self.config.max_size_mb * 1024 * 1024,
            backupCount=self.config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(self._create_formatter("json"))

        logging.getLogger().addHandler(file_handler)
        self.handlers.append(file_handler)

    def get_logger(self, name: str = "ddns6") -> structlog.stdlib.BoundLogger:
        """Get a structured logger instance.

        Args:
            name: Logger name

        Returns:
            Structured logger instance
        """
        if not self._configured:
            self.configure()

        return structlog.get_logger(name)


# Global logger instance
_logger_instance: Optional[StructuredLogger] = None


def setup_logging(config: LoggingConfig) -> StructuredLogger:
    """Setup global logging configuration.

    Args:
        config: Logging configuration
    """
    global _logger_instance
    _logger_instance = StructuredLogger(config)
    _logger_instance.configure()
    return _logger_instance


def get_logger(name: str = "ddns6") -> structlog.stdlib.BoundLogger:
    """Get a logger instance, configuring defaults on first use.

    Args:
        name: Logger name

    Returns:
        Structured logger instance
    """
    if _logger_instance is None:
        setup_logging(LoggingConfig())

    return _logger_instance.get_logger(name)


def log_exception(
    logger: structlog.stdlib.BoundLogger, message: str, exc: Exception = None, **kw
) -> None:
    """Log an exception with its type, message and traceback.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance (optional, will use current exception if None)
        **kw: Extra key-value context for the event
    """
    if exc is None:
        exc = sys.exc_info()[1]

    if exc is None:
        logger.error(message, **kw)
        return

    tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error(
        message,
        exception_type=type(exc).__name__,
        exception_message=str(exc),
        traceback=tb_str,
        **kw,
    )
