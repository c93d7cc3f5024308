import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from . import settings

CONSOLE_FORMAT = "%(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str = "restock",
    log_level: Optional[int] = None,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Configures the application logger: bare messages on stdout for the operator,
    timestamped lines in a rotating file under LOG_DIR for later inspection.
    Module loggers (`restock.*`) propagate here.
    """
    if log_level is None:
        log_level = logging.getLevelName(settings.LOG_LEVEL)
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Configure once per process
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    log_dir = log_dir or settings.LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_dir / "restock.log", maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"  # 5 MB
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    logger.addHandler(file_handler)

    return logger
