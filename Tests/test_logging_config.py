"""
Tests for loguru sink configuration
"""

import sys

import pytest
from loguru import logger

from mindmap_editor.logging_config import LOG_LEVEL_ENV, configure_logging, resolve_log_level


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


class TestLogLevel:
    def test_environment_wins(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
        assert resolve_log_level("WARNING") == "DEBUG"

    def test_configured_then_default(self, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        assert resolve_log_level("warning") == "WARNING"
        assert resolve_log_level(None) == "INFO"


class TestConfigureLogging:
    def test_file_sink(self, tmp_path, monkeypatch, restore_logger):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        log_file = tmp_path / "logs" / "mindmap.log"
        configure_logging("INFO", log_file=str(log_file))
        logger.debug("hidden detail")
        logger.info("visible message")
        logger.remove()

        content = log_file.read_text(encoding="utf-8")
        assert "visible message" in content
        assert "hidden detail" not in content
