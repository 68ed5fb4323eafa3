"""Unit tests for utils.py."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from tracklist.config import LoggingConfig
from tracklist.utils import parse_timestamp, setup_logging, setup_logging_from_config, truncate


class TestParseTimestamp:
    @pytest.mark.parametrize(
        "value,seconds",
        [
            ("3:45", 225),
            ("00:01:56", 116),
            ("1:02:03", 3723),
            ("3:09-5:50", 189),
            ("0:00–3:15", 0),
        ],
    )
    def test_valid(self, value, seconds):
        assert parse_timestamp(value) == seconds

    @pytest.mark.parametrize("value", ["", "abc", "12", "1:2:3:4"])
    def test_invalid(self, value):
        assert parse_timestamp(value) is None


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("short") == "short"

    def test_long_text_shortened(self):
        text = truncate("x" * 100, limit=20)

        assert len(text) == 20
        assert text.endswith("...")

    def test_newlines_flattened(self):
        assert truncate("a\nb") == "a b"


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_file_and_console_handlers(self, tmp_path):
        setup_logging(level=logging.DEBUG, log_file=str(tmp_path / "run.log"))

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)
        assert len(root.handlers) == 2
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_from_config_without_file(self):
        setup_logging_from_config(LoggingConfig(level="warning", file_path="", console_output=True))

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert not any(isinstance(h, RotatingFileHandler) for h in root.handlers)
