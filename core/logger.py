"""
============================================================
Centralized logging configuration for the statement builder.
============================================================

The library modules only ever call ``logging.getLogger(__name__)``; nothing is
configured on import. Applications (or a debugging session) opt in with
``setup_logging()``, which provides:
- Console output with colored level names
- Optional file output
- A dedicated level for the ``connect`` package, whose DEBUG records carry
  every executed SQL statement

Example:
    >>> from core.logger import get_logger, setup_logging
    >>>
    >>> # Show every executed statement
    >>> setup_logging(log_level='INFO', query_log_level='DEBUG')
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("Import started")
"""

import copy
import logging
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Logger that receives one DEBUG record per executed statement
QUERY_LOGGER = 'connect'


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps the level name in ANSI colors.

    The record is copied before decoration so that other handlers attached
    to the same logger (e.g. a file handler) keep the plain level name.

    Attributes:
        COLORS: Dict mapping log levels to ANSI color codes
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        """Format log record with a colored level name.

        Args:
            record: LogRecord instance to format

        Returns:
            Formatted log message string
        """
        color = self.COLORS.get(record.levelname)
        if color:
            record = copy.copy(record)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ of calling module)
        level: Optional logging level override (DEBUG/INFO/WARNING/ERROR/CRITICAL)

    Returns:
        Logger instance

    Example:
        >>> logger = get_logger(__name__, level='DEBUG')
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    return logger


def setup_logging(
    log_level: str = 'INFO',
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
    console_output: bool = True,
    use_colors: bool = True,
    query_log_level: Optional[str] = None
) -> None:
    """Setup centralized logging configuration.

    Configures the root logger with console and/or file handlers.
    Should be called once at application startup.

    Args:
        log_level: Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name (e.g., 'queries.log')
        log_dir: Optional log directory path (defaults to 'logs/')
        console_output: If True, output to console (stdout)
        use_colors: If True, use colored output for console
        query_log_level: Optional level for the ``connect`` logger; 'DEBUG'
            logs every executed statement with its runtime

    Example:
        >>> setup_logging(
        ...     log_level='INFO',
        ...     log_file='queries.log',
        ...     query_log_level='DEBUG'
        ... )
    """
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        if use_colors:
            console_handler.setFormatter(ColoredFormatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT))
        else:
            console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir) if log_dir else Path('logs')
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)

    if query_log_level:
        logging.getLogger(QUERY_LOGGER).setLevel(getattr(logging, query_log_level.upper()))
