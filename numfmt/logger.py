"""Logging setup for numfmt applications.

The library modules only create loggers (numfmt.formatter,
numfmt.config, numfmt.template_func). Front ends such as the command
line call setup_logger once to route those records to stderr and,
optionally, to a rotating log file.

Console output goes to stderr so formatted values written to stdout
can be piped without log lines mixed in.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Handlers attached to the root logger by the last setup_logger call
_installed_handlers: List[logging.Handler] = []


def setup_logger(
    name: str = "numfmt",
    level: str = "INFO",
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """Route numfmt log records to stderr and an optional log file.

    Handlers go on the root logger so every module logger below name
    reaches them. Calling setup_logger again swaps out the handlers of
    the previous call; handlers installed by anyone else are left alone.

    Args:
        name: Logger to configure and return
        level: Log level name, case-insensitive
        log_file: Path of a rotating log file. Parent directories are
            created. If None, records only go to stderr.
        max_bytes: Size at which the log file is rotated
        backup_count: Rotated files to keep

    Returns:
        The named logger

    Raises:
        ValueError: If level is not a known level name
        OSError: If the log file cannot be opened

    Examples:
        >>> logger = setup_logger(level="DEBUG", log_file="logs/numfmt.log")
        >>> logger.debug("Formatting started")
    """
    log_level = _parse_log_level(level)
    handlers = _build_handlers(log_file, max_bytes, backup_count)

    root_logger = logging.getLogger()
    _remove_installed_handlers(root_logger)
    root_logger.setLevel(log_level)
    for handler in handlers:
        handler.setLevel(log_level)
        root_logger.addHandler(handler)
    _installed_handlers.extend(handlers)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.propagate = True
    return logger


def get_logger(name: str = "numfmt") -> logging.Logger:
    """Return a logger below the one configured by setup_logger.

    Args:
        name: Dotted logger name, usually a module's __name__
    """
    return logging.getLogger(name)


def _parse_log_level(level: str) -> int:
    """Map a level name to its logging constant.

    Raises:
        ValueError: If level is not one of LEVELS
    """
    try:
        return LEVELS[level.upper()]
    except KeyError:
        raise ValueError(
            f"Invalid log level: {level}. Valid levels: {list(LEVELS)}"
        ) from None


def _build_handlers(
    log_file: Optional[str],
    max_bytes: int,
    backup_count: int,
) -> List[logging.Handler]:
    """Create the stderr handler and, if requested, the file handler."""
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def _remove_installed_handlers(root_logger: logging.Logger) -> None:
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()
