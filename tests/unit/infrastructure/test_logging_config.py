"""Tests for configure_logging."""

import logging

import pytest

from recurra.infrastructure.logging_config import NOISY_LOGGERS, configure_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    def test_level_from_settings(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        configure_logging()

        assert logging.getLogger().level == logging.DEBUG

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        configure_logging("warning")

        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        configure_logging("chatty")

        assert logging.getLogger().level == logging.INFO

    @pytest.mark.parametrize(
        ("echo", "expected"),
        [("false", logging.WARNING), ("true", logging.INFO)],
    )
    def test_sql_loggers_follow_database_echo(self, monkeypatch, echo, expected):
        monkeypatch.setenv("DATABASE_ECHO", echo)

        configure_logging("DEBUG")

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == expected
