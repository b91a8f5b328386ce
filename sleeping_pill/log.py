"""Logging setup shared by the CLI and the monitor loop"""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .ui import console


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(verbose: bool = False, log_file: Optional[str] = None):
    """
    Configure the root logger

    Console records go through rich on the shared console; a plain file
    handler is added when a log file is given.

    Args:
        verbose: Log debug records as well
        log_file: Optional path of a log file to append to
    """
    level = logging.DEBUG if verbose else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Replace handlers from a previous call
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)

    console_handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        setup_file_logging(log_file, level)


def setup_file_logging(log_file: str, level: int = logging.INFO) -> bool:
    """Add a file handler to the root logger"""
    try:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(path, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

        logging.getLogger().addHandler(file_handler)
        logging.getLogger(__name__).debug("File logging enabled: %s", path)
        return True
    except OSError as e:
        logging.getLogger(__name__).error("Failed to setup file logging: %s", e)
        return False
