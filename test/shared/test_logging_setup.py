"""Tests for shared/logging_setup.py — logger creation with optional rotation."""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from shared.logging_setup import parse_level, setup_logger


def test_setup_logger_returns_logger():
    logger = setup_logger("shop_test1")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "shop_test1"


def test_console_only_without_log_dir():
    logger = setup_logger("shop_test2")
    assert len(logger.handlers) == 1
    assert not any(isinstance(h, RotatingFileHandler) for h in logger.handlers)


def test_file_handler_with_log_dir(tmp_path):
    log_dir = tmp_path / "logs"
    logger = setup_logger("shop_test3", log_dir, "app.log")

    assert log_dir.exists()
    assert (log_dir / "app.log").exists()
    file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].maxBytes == 5_000_000
    assert file_handlers[0].backupCount == 3


def test_rotation_params(tmp_path):
    logger = setup_logger("shop_test4", tmp_path, "app.log", max_bytes=1_000, backup_count=5)
    handler = next(h for h in logger.handlers if isinstance(h, RotatingFileHandler))
    assert handler.maxBytes == 1_000
    assert handler.backupCount == 5


def test_level_name_accepted():
    logger = setup_logger("shop_test5", level="debug")
    assert logger.level == logging.DEBUG


def test_default_level():
    logger = setup_logger("shop_test6")
    assert logger.level == logging.INFO


def test_formatter_pattern():
    logger = setup_logger("shop_test7")
    fmt = logger.handlers[0].formatter._fmt
    assert "%(asctime)s" in fmt
    assert "%(levelname)" in fmt
    assert "%(message)s" in fmt


def test_no_duplicate_handlers():
    logger1 = setup_logger("shop_test_dup")
    count1 = len(logger1.handlers)
    logger2 = setup_logger("shop_test_dup")
    assert logger1 is logger2
    assert len(logger2.handlers) == count1


@pytest.mark.parametrize("value, expected", [
    ("WARNING", logging.WARNING),
    ("error", logging.ERROR),
    ("10", 10),
    (logging.CRITICAL, logging.CRITICAL),
    (None, logging.INFO),
    ("", logging.INFO),
    ("verbose", logging.INFO),
])
def test_parse_level(value, expected):
    assert parse_level(value) == expected
