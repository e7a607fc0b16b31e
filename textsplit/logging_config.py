"""
Logging setup for textsplit.

Library modules only create loggers; handlers are installed once per run by
setup_logging, which the CLI calls before doing any work.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union


SIMPLE_FORMAT = "%(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# tiktoken downloads and caches encoding files through these
NOISY_LOGGERS = ("urllib3", "requests", "filelock")


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    verbose: bool = False,
) -> None:
    """
    Route log records to stdout, and optionally to a file.

    Args:
        log_level: Root level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file that receives every record with timestamps
        verbose: Add timestamps and logger names to console output
    """
    console_handler = logging.StreamHandler(sys.stdout)
    if verbose:
        console_handler.setFormatter(logging.Formatter(VERBOSE_FORMAT, datefmt="%H:%M:%S"))
    else:
        console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(VERBOSE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(name)
