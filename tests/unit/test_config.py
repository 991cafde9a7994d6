"""Tests for Config: defaults, environment overrides and the settings file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from gamecatalog.config import Config

_ENV_VARS = (
    "GAMECATALOG_DATABASE_PATH",
    "GAMECATALOG_LOG_LEVEL",
    "GAMECATALOG_LOG_FILE",
    "GAMECATALOG_LOCALE",
    "GAMECATALOG_DB_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate from the developer's environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings_file(tmp_path) -> Path:
    return tmp_path / "settings.json"


class TestConfig:
    """Tests for Config resolution order."""

    def test_defaults(self, settings_file) -> None:
        """Without overrides the documented defaults apply."""
        cfg = Config(SETTINGS_FILE=settings_file)
        assert cfg.DATABASE_PATH.name == "catalog.db"
        assert cfg.LOG_LEVEL == "INFO"
        assert cfg.LOCALE == "en"
        assert cfg.LOG_FILE is None
        assert cfg.DB_TIMEOUT == 5.0

    def test_environment_overrides(self, monkeypatch, settings_file, tmp_path) -> None:
        """GAMECATALOG_* variables override defaults."""
        monkeypatch.setenv("GAMECATALOG_DATABASE_PATH", str(tmp_path / "env.db"))
        monkeypatch.setenv("GAMECATALOG_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("GAMECATALOG_LOG_FILE", str(tmp_path / "app.log"))
        monkeypatch.setenv("GAMECATALOG_LOCALE", "de")
        monkeypatch.setenv("GAMECATALOG_DB_TIMEOUT", "1.5")

        cfg = Config(SETTINGS_FILE=settings_file)

        assert cfg.DATABASE_PATH == tmp_path / "env.db"
        assert cfg.LOG_LEVEL == "DEBUG"
        assert cfg.LOG_FILE == tmp_path / "app.log"
        assert cfg.LOCALE == "de"
        assert cfg.DB_TIMEOUT == 1.5

    def test_invalid_timeout_is_ignored(self, monkeypatch, settings_file, caplog) -> None:
        """A non-numeric timeout keeps the default and logs a warning."""
        monkeypatch.setenv("GAMECATALOG_DB_TIMEOUT", "soon")
        with caplog.at_level(logging.WARNING, logger="gamecatalog.config"):
            cfg = Config(SETTINGS_FILE=settings_file)
        assert cfg.DB_TIMEOUT == 5.0
        assert "GAMECATALOG_DB_TIMEOUT" in caplog.text

    def test_settings_file_applies_last(self, monkeypatch, settings_file, tmp_path) -> None:
        """settings.json wins over the environment."""
        monkeypatch.setenv("GAMECATALOG_LOG_LEVEL", "DEBUG")
        settings_file.write_text(
            json.dumps({"database_path": str(tmp_path / "settings.db"), "log_level": "WARNING", "db_timeout": 2}),
            encoding="utf-8",
        )

        cfg = Config(SETTINGS_FILE=settings_file)

        assert cfg.DATABASE_PATH == tmp_path / "settings.db"
        assert cfg.LOG_LEVEL == "WARNING"
        assert cfg.DB_TIMEOUT == 2.0

    def test_broken_settings_file(self, settings_file, caplog) -> None:
        """Unreadable settings are logged and defaults kept."""
        settings_file.write_text("{broken", encoding="utf-8")
        with caplog.at_level(logging.ERROR, logger="gamecatalog.config"):
            cfg = Config(SETTINGS_FILE=settings_file)
        assert cfg.LOG_LEVEL == "INFO"
        assert caplog.records
