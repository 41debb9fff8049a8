"""Standardized logging setup for the Shopify MCP server."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def parse_level(value: str | int | None, default: int = logging.INFO) -> int:
    """Turn ``"debug"`` / ``"WARNING"`` / ``10`` into a logging level."""
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    if value.strip().isdigit():
        return int(value)
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default


def setup_logger(
    name: str,
    log_dir: Path | None = None,
    log_filename: str | None = None,
    level: int | str | None = logging.INFO,
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> logging.Logger:
    """Create a logger with a console handler and an optional rotating file.

    Containers usually only need stdout, so the file handler is added only
    when both ``log_dir`` and ``log_filename`` are given.

    Args:
        name: Logger name (e.g. "shopify_mcp")
        log_dir: Directory for log files (created if not exists)
        log_filename: Log file name (e.g. "shopify_mcp.log")
        level: Logging level, as an int or a level name
        max_bytes: Max size per log file before rotation
        backup_count: Number of backup files to keep

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(parse_level(level))

    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_dir is not None and log_filename:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_dir / log_filename,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
