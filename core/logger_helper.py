"""
logger_helper.py - Logging Helpers

get_logger(name): named logger for a module, output is delegated to the root logger.
setup_logging(level, log_file): configure root handlers (entry points only).
"""

import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a logger with the given name, or this module's name if None.

    Args:
        name: Logger name, normally the caller's __name__

    Returns:
        Logger instance without handlers of its own
    """
    return logging.getLogger(name or __name__)


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[Path] = None,
) -> None:
    """
    Configure root logging for command-line use.

    Console output stays terse; the optional log file receives the full format
    at DEBUG level regardless of the console level.

    Args:
        level: Console log level
        log_file: Optional path for a detailed log file
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(console)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)
        root.setLevel(logging.DEBUG)
    else:
        root.setLevel(level)
