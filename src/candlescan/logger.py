"""
Logging infrastructure for Candlescan.
"""

import logging
import logging.handlers
import re
import sys
from pathlib import Path
from typing import Optional

from .config import LoggingConfig


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


class StructuredFormatter(logging.Formatter):
    """Structured formatter for file output."""

    def format(self, record: logging.LogRecord) -> str:
        # Add extra fields for scan context
        original_msg = record.msg
        if hasattr(record, 'pattern'):
            record.msg = f"[{record.pattern}] {record.msg}"
        if hasattr(record, 'source'):
            record.msg = f"[{record.source}] {record.msg}"
        try:
            return super().format(record)
        finally:
            record.msg = original_msg


def setup_logger(
    name: str,
    level: str = "INFO",
    log_file: Optional[str] = None,
    max_size: str = "10MB",
    backup_count: int = 5,
    console_output: bool = True
) -> logging.Logger:
    """
    Set up a logger with file rotation and optional console output.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional)
        max_size: Maximum log file size before rotation
        backup_count: Number of backup files to keep
        console_output: Whether to output to console

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Clear existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(ColoredFormatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=_parse_size(max_size),
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(StructuredFormatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def get_logger(name: str, level: str = "INFO", log_file: Optional[str] = "./logs/candlescan.log") -> logging.Logger:
    """
    Get a logger instance with default configuration.

    Args:
        name: Logger name
        level: Logging level
        log_file: Log file path, or None for console only

    Returns:
        Logger instance
    """
    return setup_logger(
        name=name,
        level=level,
        log_file=log_file,
        console_output=True
    )


_SIZE_PATTERN = re.compile(r'^\s*(\d+(?:\.\d+)?)\s*(GB|MB|KB|B)?\s*$', re.IGNORECASE)
_SIZE_UNITS = {'B': 1, 'KB': 1024, 'MB': 1024 ** 2, 'GB': 1024 ** 3}
DEFAULT_MAX_BYTES = 10 * 1024 ** 2


def _parse_size(size_str: str) -> int:
    """
    Parse size string (e.g., '10MB', '1GB') to bytes.

    A bare number is read as bytes; anything unparseable gives 10MB.
    """
    match = _SIZE_PATTERN.match(size_str)
    if match is None:
        return DEFAULT_MAX_BYTES
    number, unit = match.groups()
    return int(float(number) * _SIZE_UNITS[(unit or 'B').upper()])


def setup_logging(settings: LoggingConfig, name: str = "candlescan", verbose: bool = False) -> logging.Logger:
    """
    Configure the application logger from a LoggingConfig section.

    Args:
        settings: Logging section of the loaded Config
        name: Logger name
        verbose: Force DEBUG regardless of the configured level

    Returns:
        Configured logger instance
    """
    return setup_logger(
        name,
        level="DEBUG" if verbose else settings.level,
        log_file=settings.file_path,
        max_size=settings.max_size,
        backup_count=settings.backup_count,
        console_output=settings.console_output
    )


class ScanLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter carrying the input source and pattern being scanned."""

    def process(self, msg: str, kwargs: dict) -> tuple:
        extra = dict(self.extra)
        extra.update(kwargs.get('extra', {}))
        kwargs['extra'] = extra
        return msg, kwargs


def get_scan_adapter(
    logger: logging.Logger,
    pattern: Optional[str] = None,
    source: Optional[str] = None
) -> ScanLoggerAdapter:
    """
    Wrap a logger with scan context.

    Args:
        logger: Logger to wrap
        pattern: Pattern name being scanned
        source: Input file or other data source

    Returns:
        Logger adapter with scan context
    """
    extra = {}
    if pattern:
        extra['pattern'] = pattern
    if source:
        extra['source'] = source
    return ScanLoggerAdapter(logger, extra)
