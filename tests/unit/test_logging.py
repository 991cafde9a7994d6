"""Tests for the application logger setup."""

from __future__ import annotations

import logging

from gamecatalog.core.logging import logger, resolve_level, setup_logging


class TestResolveLevel:
    def test_names_and_numbers(self) -> None:
        """Level names are case-insensitive; numbers pass through."""
        assert resolve_level("debug") == logging.DEBUG
        assert resolve_level(" Warning ") == logging.WARNING
        assert resolve_level(logging.ERROR) == logging.ERROR

    def test_unknown_name_falls_back_to_info(self) -> None:
        assert resolve_level("chatty") == logging.INFO


class TestSetupLogging:
    def test_file_handler_receives_child_records(self, tmp_path) -> None:
        """Records from gamecatalog.* loggers reach the log file."""
        log_file = tmp_path / "logs" / "catalog.log"
        setup_logging("DEBUG", log_file)

        logging.getLogger("gamecatalog.database").info("opened test db")
        for handler in logger.handlers:
            handler.flush()

        assert "opened test db" in log_file.read_text(encoding="utf-8")

    def test_repeated_setup_adds_no_handlers(self) -> None:
        """Calling setup twice only adjusts the level."""
        setup_logging("INFO")
        count = len(logger.handlers)
        setup_logging("ERROR")
        assert len(logger.handlers) == count
        assert logger.level == logging.ERROR

    def test_log_file_added_on_later_call(self, tmp_path) -> None:
        """A file given after the console is set up still gets a handler."""
        setup_logging("INFO")
        log_file = tmp_path / "late.log"
        setup_logging("INFO", log_file)

        assert sorted(h.get_name() for h in logger.handlers) == ["gamecatalog.console", "gamecatalog.file"]
        setup_logging("INFO", tmp_path / "other.log")
        assert len(logger.handlers) == 2

    def test_console_level_follows_setup(self) -> None:
        """Changing the level also changes the console handler's level."""
        setup_logging("INFO")
        setup_logging("WARNING")
        console = next(h for h in logger.handlers if h.get_name() == "gamecatalog.console")
        assert console.level == logging.WARNING
