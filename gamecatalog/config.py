"""
Configuration - database location, logging and locale.
Values come from defaults, then .env / environment, then settings.json.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger("gamecatalog.config")


__all__ = ["Config", "config"]


@dataclass
class Config:
    """
    Central configuration handling for the application.
    Manages paths, logging and the database connection settings.
    """

    APP_DIR: Path = Path(__file__).parent.parent
    DATA_DIR: Path = APP_DIR / "data"
    DATABASE_PATH: Path = DATA_DIR / "catalog.db"
    SETTINGS_FILE: Path = DATA_DIR / "settings.json"

    LOCALE: str = "en"
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Path | None = None

    # Seconds sqlite3 waits on a locked database before raising
    DB_TIMEOUT: float = 5.0

    def __post_init__(self):
        """Apply .env / environment overrides, then the settings file."""
        load_dotenv()

        env_db = os.getenv("GAMECATALOG_DATABASE_PATH")
        if env_db:
            self.DATABASE_PATH = Path(env_db)

        self.LOG_LEVEL = os.getenv("GAMECATALOG_LOG_LEVEL", self.LOG_LEVEL)
        self.LOCALE = os.getenv("GAMECATALOG_LOCALE", self.LOCALE)

        env_log_file = os.getenv("GAMECATALOG_LOG_FILE")
        if env_log_file:
            self.LOG_FILE = Path(env_log_file)

        env_timeout = os.getenv("GAMECATALOG_DB_TIMEOUT")
        if env_timeout:
            try:
                self.DB_TIMEOUT = float(env_timeout)
            except ValueError:
                logger.warning("Ignoring invalid GAMECATALOG_DB_TIMEOUT: %s", env_timeout)

        self._load_settings()

    def _load_settings(self) -> None:
        """Load settings from JSON file."""
        # Local import to avoid circular dependency
        from gamecatalog.utils.i18n import t

        if not self.SETTINGS_FILE.exists():
            return

        try:
            with open(self.SETTINGS_FILE, "r", encoding="utf-8") as f:
                data = json.load(f)

                database_path = data.get("database_path")
                if database_path:
                    self.DATABASE_PATH = Path(database_path)

                log_file = data.get("log_file")
                if log_file:
                    self.LOG_FILE = Path(log_file)

                self.LOG_LEVEL = data.get("log_level", self.LOG_LEVEL)
                self.LOCALE = data.get("locale", self.LOCALE)
                self.DB_TIMEOUT = float(data.get("db_timeout", self.DB_TIMEOUT))

        except (OSError, json.JSONDecodeError, TypeError, ValueError) as e:
            logger.error(t("logs.config.load_error", error=e))


# Global instance
config = Config()
