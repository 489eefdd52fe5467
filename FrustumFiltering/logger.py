"""
Logging for FrustumFiltering

Every component logs to a child of the "FrustumFiltering" logger
(FrustumFiltering.depth_range, FrustumFiltering.scanner, ...). Handlers are only
attached to that parent, by the command line entry point or by an embedding
application calling configure_root_logger().
"""

import logging
import sys
from pathlib import Path
from typing import Optional


ROOT_LOGGER_NAME = "FrustumFiltering"

# [2025-10-31 10:15:30] [INFO] [FrustumFiltering.scanner] 10 pairs tested
LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str = "INFO",
    log_file: Optional[str] = None,
    console: bool = True,
    force: bool = False
) -> logging.Logger:
    """
    Attach console and/or file handlers to a logger.

    A logger that already has handlers is returned untouched unless force is
    set, in which case its handlers are closed and replaced.
    """
    logger = logging.getLogger(name)

    if logger.handlers and not force:
        return logger

    logger.setLevel(getattr(logging, level.upper()))
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Component logger, e.g. get_logger("scanner") -> FrustumFiltering.scanner"""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_root_logger(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """(Re)configure the FrustumFiltering logger for a filtering run"""
    return setup_logger(
        name=ROOT_LOGGER_NAME,
        level=level,
        log_file=log_file,
        console=True,
        force=True
    )
