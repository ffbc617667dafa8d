"""Logging configuration for notion-blog."""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "notion-blog.log"


def setup_logging(log_dir: Optional[Path] = None, retention_days: int = 14, verbose: bool = False):
    """Configure console logging, plus a log file rotated at midnight when log_dir is given.

    Args:
        log_dir: Directory for log files (created if missing). None disables file logging.
        retention_days: How many rotated log files to keep
        verbose: If True, set console to DEBUG level
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove existing handlers (avoid duplicates)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_formatter = logging.Formatter('[%(asctime)s] %(message)s', datefmt='%H:%M:%S')
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / LOG_FILE_NAME
        file_handler = logging.handlers.TimedRotatingFileHandler(
            filename=log_file,
            when='midnight',
            interval=1,
            backupCount=retention_days,
            encoding='utf-8',
        )
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            '%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return root_logger
