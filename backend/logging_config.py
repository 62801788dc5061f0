"""
Logging Configuration for Psak Din Search
=========================================

Console logging plus an optional rotating file log. Library modules only
call logging.getLogger(__name__); handlers are installed here, once, by the
application entry point.

Entry points call, once:

    setup_logging(log_level="DEBUG", log_file="logs/search.log")
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Iterable, Optional, Union

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that drown application logs at DEBUG
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "asyncio", "uvicorn.access")

# Set by setup_logging(); later calls are no-ops unless forced
_logging_initialized = False


def default_log_file(log_dir: Union[str, Path]) -> Path:
    """Dated log file inside log_dir."""
    return Path(log_dir) / f"psak_din_search_{datetime.now().strftime('%Y%m%d')}.log"


def setup_logging(
    log_level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    quiet_libs: Iterable[str] = NOISY_LOGGERS,
    log_format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    force: bool = False
) -> logging.Logger:
    """
    Configure the root logger.

    Args:
        log_level: Console level (name or number)
        log_file: Optional path; the file handler logs DEBUG, rotates at 10MB
        quiet_libs: Logger names raised to WARNING
        log_format: Format shared by both handlers
        date_format: strftime format for %(asctime)s
        force: Re-initialize even if already set up

    Returns the root logger.
    """
    global _logging_initialized

    root_logger = logging.getLogger()
    if _logging_initialized and not force:
        return root_logger

    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())

    root_logger.setLevel(logging.DEBUG)  # Capture all, filter at handler level

    # Replaces whatever handlers are installed, including a previous setup
    root_logger.handlers.clear()

    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for name in quiet_libs:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.info("=" * 60)
    root_logger.info("Psak Din Search - Logging initialized")
    if log_file:
        root_logger.info(f"Log file: {log_file}")
    root_logger.info(f"Console level: {logging.getLevelName(log_level)}")
    root_logger.info("=" * 60)

    _logging_initialized = True
    return root_logger


def is_initialized() -> bool:
    return _logging_initialized
