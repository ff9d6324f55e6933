"""
logging_utils.py
================

Logging setup for applications using varquantity.

The library itself only attaches a ``NullHandler`` to the ``varquantity``
logger. Applications that want to see construction details (DEBUG) or
contract violations (CRITICAL) call `setup_logger` once.
"""

import logging
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "varquantity"


def setup_logger(
    level: str = "INFO", log_path: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Configure the ``varquantity`` logger.

    Logs to:
    • console
    • file (log_path), if given

    Parameters
    ----------
    level : str
        Logging level:
        "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"
    log_path : Path, optional
        Path to log file.

    Returns
    -------
    logger : logging.Logger
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Prevent duplicate handlers if setup_logger is called multiple times
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return logger

    level = level.upper()
    logger.setLevel(getattr(logging, level, logging.INFO))

    fmt = (
        "%(asctime)s | "
        "%(levelname)-8s | "
        "%(name)s | "
        "%(message)s"
    )
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt, datefmt=datefmt)

    ch = logging.StreamHandler()
    ch.setLevel(logger.level)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    if log_path is not None:
        log_path = Path(log_path).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path, mode="w", encoding="utf-8")
        fh.setLevel(logger.level)
        fh.setFormatter(formatter)
        logger.addHandler(fh)
        logger.info("Logging to file: %s", log_path)

    logger.debug("Logger initialized")
    return logger
