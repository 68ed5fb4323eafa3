"""Utilities and helper functions."""

import logging
import re
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = "tracklist.log",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 3,
    console_output: bool = True,
) -> None:
    """Setup logging configuration.

    Parameters
    ----------
    level: int
        Logging level.
    log_file: str, optional
        Path to the log file. ``None`` disables file logging.
    max_bytes: int
        Maximum size in bytes before rotating the log file.
    backup_count: int
        Number of rotated log files to keep.
    console_output: bool
        Whether to also log to the console.
    """

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)

    if log_file:
        file_handler = RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("yt_dlp").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def setup_logging_from_config(logging_config) -> None:
    """Apply a LoggingConfig section."""
    setup_logging(
        level=getattr(logging, logging_config.level.upper(), logging.INFO),
        log_file=logging_config.file_path or None,
        max_bytes=logging_config.max_file_size_mb * 1024 * 1024,
        backup_count=logging_config.backup_count,
        console_output=logging_config.console_output,
    )


def parse_timestamp(value: str) -> Optional[int]:
    """Convert an ``M:SS`` / ``H:MM:SS`` token into seconds.

    For a range (``3:09-5:50``) the start of the range is used.
    """
    if not value:
        return None
    start = re.split(r"[-–]", value, maxsplit=1)[0].strip()
    try:
        parts = [int(part) for part in start.split(":")]
    except ValueError:
        return None
    if len(parts) == 3:
        return parts[0] * 3600 + parts[1] * 60 + parts[2]
    if len(parts) == 2:
        return parts[0] * 60 + parts[1]
    return None


def truncate(text: str, limit: int = 80) -> str:
    """Shorten text for log lines."""
    text = text.replace("\n", " ")
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."
