"""Logging setup: rich console output plus an optional log file."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "drivemapper"


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure the ``drivemapper`` logger.

    Args:
        verbose: Emit DEBUG messages instead of INFO
        log_file: Also append plain-text records to this file

    Returns:
        The configured package logger
    """
    level = logging.DEBUG if verbose else logging.INFO
    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(level)

    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    rich_handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_level=True,
        show_path=verbose,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
    )
    rich_handler.setLevel(level)
    app_logger.addHandler(rich_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
        )
        file_handler.setLevel(level)
        app_logger.addHandler(file_handler)

    return app_logger
