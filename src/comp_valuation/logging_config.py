"""
Logging Configuration for the Comparable Valuation Engine

The engine modules only create module loggers (logging.getLogger(__name__));
host applications call one of the setup functions here once at startup.

Provides:
- Rotating file handlers (prevents unbounded log growth)
- Colored console output
- Module-specific level overrides
- Presets for production, development and testing

Usage Example:
    import logging
    from comp_valuation.logging_config import setup_logging

    setup_logging(level="INFO", log_dir="logs", enable_console=True)

    logger = logging.getLogger(__name__)
    logger.info("Valuation service started")

Log Files Created:
- logs/comp_valuation.log: Main log (INFO+)
- logs/comp_valuation_debug.log: Debug log (DEBUG+)
- logs/comp_valuation_error.log: Error log (ERROR+)

Each file rotates at 10MB with 5 backup files.
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional


DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_PREFIX = "comp_valuation"


class ColoredFormatter(logging.Formatter):
    """
    Colored formatter for console output.

    Adds ANSI color codes to log levels for better readability.
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        """Add color to levelname without leaking it into other handlers."""
        original = record.levelname
        if original in self.COLORS:
            record.levelname = f"{self.COLORS[original]}{original}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _rotating_handler(
    log_dir: str,
    suffix: str,
    level: int,
    fmt: str,
    max_bytes: int,
    backup_count: int,
) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=os.path.join(log_dir, f"{LOG_FILE_PREFIX}{suffix}.log"),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    enable_console: bool = True,
    enable_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    format_style: str = "detailed"
) -> None:
    """
    Setup application-wide logging configuration.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        enable_console: Whether to log to console
        enable_file: Whether to log to file
        max_bytes: Maximum size per log file before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)
        format_style: "detailed" or "simple" format
    """
    if enable_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    log_format = DETAILED_FORMAT if format_style == "detailed" else SIMPLE_FORMAT

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, level.upper()))
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if enable_file:
        root_logger.addHandler(
            _rotating_handler(log_dir, "", logging.INFO, log_format, max_bytes, backup_count)
        )
        root_logger.addHandler(
            _rotating_handler(log_dir, "_debug", logging.DEBUG, DETAILED_FORMAT, max_bytes, backup_count)
        )
        root_logger.addHandler(
            _rotating_handler(log_dir, "_error", logging.ERROR, DETAILED_FORMAT, max_bytes, backup_count)
        )

    root_logger.info(
        f"Logging initialized - Level: {level}, "
        f"Console: {enable_console}, File: {enable_file}"
    )


def log_exception(
    logger: logging.Logger,
    exception: Exception,
    context: Optional[dict] = None,
    level: str = "ERROR"
) -> None:
    """
    Log an exception with its traceback and key=value context.

    Args:
        logger: Logger instance
        exception: Exception to log
        context: Additional context dict (subject_id, case, etc.)
        level: Log level (default: ERROR)

    Example:
        >>> try:
        ...     source.load(subject_id)
        ... except SubjectNotFoundError as e:
        ...     log_exception(logger, e, context={"subject_id": subject_id}, level="WARNING")
        ...     raise
    """
    details = ""
    if context:
        details = " [" + ", ".join(f"{k}={v}" for k, v in context.items()) + "]"

    logger.log(
        getattr(logging, level.upper()),
        "%s%s: %s",
        type(exception).__name__, details, exception,
        exc_info=exception,
    )


def configure_module_logger(
    module_name: str,
    level: Optional[str] = None,
    propagate: bool = True
) -> logging.Logger:
    """
    Configure logging for a specific module.

    Args:
        module_name: Module name (e.g., "comp_valuation.stages.comparator")
        level: Log level for this module (None = inherit from root)
        propagate: Whether to propagate to parent loggers
    """
    logger = logging.getLogger(module_name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    logger.propagate = propagate

    return logger


def setup_stage_logging(level: str = "INFO") -> None:
    """
    Configure logging for the valuation stages.

    The comparator logs every skipped category at DEBUG, which is noisy
    when valuations run on every slider change.
    """
    configure_module_logger("comp_valuation.stages", level=level)
    configure_module_logger("comp_valuation.stages.inflation", level=level)
    configure_module_logger("comp_valuation.stages.comparator", level=level)


def setup_source_logging(level: str = "WARNING") -> None:
    """Configure logging for cohort sources."""
    configure_module_logger("comp_valuation.sources", level=level)
    configure_module_logger("comp_valuation.sources.in_memory", level=level)


def setup_production_logging(log_dir: str = "logs") -> None:
    """INFO to rotating files only, simple format."""
    setup_logging(
        level="INFO",
        log_dir=log_dir,
        enable_console=False,
        enable_file=True,
        format_style="simple"
    )
    setup_stage_logging("INFO")
    setup_source_logging("WARNING")


def setup_development_logging(log_dir: str = "logs") -> None:
    """DEBUG to colored console and files, detailed format."""
    setup_logging(
        level="DEBUG",
        log_dir=log_dir,
        enable_console=True,
        enable_file=True,
        format_style="detailed"
    )
    setup_stage_logging("DEBUG")
    setup_source_logging("DEBUG")


def setup_testing_logging() -> None:
    """WARNING to console only."""
    setup_logging(
        level="WARNING",
        log_dir="logs",
        enable_console=True,
        enable_file=False,
        format_style="simple"
    )
