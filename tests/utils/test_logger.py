"""Tests for the file logger."""

import logging
from logging.handlers import RotatingFileHandler

from habitpro_cli.utils.logger import get_logger


def test_logger_writes_to_rotating_file(tmp_log_dir, monkeypatch):
    monkeypatch.setenv("HABITPRO_LOG_LEVEL", "info")

    log = get_logger()
    log.info("completion recorded")
    log.debug("hidden at INFO")
    for handler in log.handlers:
        handler.flush()

    assert log.level == logging.INFO
    assert log.propagate is False
    assert isinstance(log.handlers[0], RotatingFileHandler)
    text = (tmp_log_dir / "habitpro.log").read_text(encoding="utf-8")
    assert "completion recorded" in text
    assert "hidden at INFO" not in text
    assert get_logger() is log


def test_unknown_level_name_falls_back_to_debug(monkeypatch):
    monkeypatch.setenv("HABITPRO_LOG_LEVEL", "chatty")

    assert get_logger().level == logging.DEBUG


def test_level_name_is_trimmed(monkeypatch):
    monkeypatch.setenv("HABITPRO_LOG_LEVEL", " warning ")

    assert get_logger().level == logging.WARNING
