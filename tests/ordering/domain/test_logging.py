"""Tests for the logging setup."""

import logging

import pytest
import structlog
from ordering.utils.logging import add_context, clear_context, configure_logging, get_logger


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    configure_logging()


class TestConfigureLogging:
    def test_level_follows_environment(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_log_level_override(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        monkeypatch.setenv("LOG_LEVEL", "error")
        configure_logging()
        assert logging.getLogger().level == logging.ERROR

    def test_writes_no_log_files(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        configure_logging()
        get_logger(__name__).warning("ping")
        assert list(tmp_path.iterdir()) == []


class TestContext:
    def test_bind_and_clear(self):
        add_context(order_id="o-1")
        assert structlog.contextvars.get_contextvars()["order_id"] == "o-1"
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
