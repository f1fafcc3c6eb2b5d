"""Unit tests for settings and logging setup."""

import json
import logging

import pytest
from pydantic import ValidationError

from matchfinder.config import Settings
from matchfinder.logging_setup import JsonFormatter, configure_logging


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("MATCHFINDER_LOG_LEVEL", raising=False)
        config = Settings(_env_file=None)

        assert config.default_rating == 1200
        assert config.history_window_days == 60
        assert config.log_level == "INFO"
        assert config.log_format == "console"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MATCHFINDER_LOG_LEVEL", "debug")
        monkeypatch.setenv("MATCHFINDER_DEFAULT_RATING", "1500")
        config = Settings(_env_file=None)

        assert config.log_level == "DEBUG"
        assert config.default_rating == 1500

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_invalid_log_format(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="xml")

    def test_history_window_must_cover_repetition_window(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, history_window_days=7)


class TestLogging:
    def test_json_formatter(self):
        record = logging.LogRecord("matchfinder.elo", logging.INFO, __file__, 1, "rated %s", ("a",), None)
        payload = json.loads(JsonFormatter().format(record))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "matchfinder.elo"
        assert payload["message"] == "rated a"

    def test_configure_logging_sets_level(self):
        root = logging.getLogger()
        previous_level, previous_handlers = root.level, root.handlers[:]
        try:
            configure_logging(Settings(_env_file=None, log_level="WARNING", log_format="json"))

            assert root.level == logging.WARNING
            assert isinstance(root.handlers[0].formatter, JsonFormatter)
        finally:
            root.handlers = previous_handlers
            root.setLevel(previous_level)
