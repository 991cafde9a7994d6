# tests/conftest.py
import logging
from collections.abc import Generator
from datetime import date
from pathlib import Path

import pytest

from gamecatalog.core.db import DBManager, GameRepository
from gamecatalog.core.game import Game


@pytest.fixture(autouse=True)
def reset_app_logger() -> Generator[None, None, None]:
    """Drop handlers added by setup_logging so each test starts clean."""
    yield
    app_logger = logging.getLogger("gamecatalog")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)


@pytest.fixture
def db_path(tmp_path) -> Path:
    """Path for a fresh SQLite database file."""
    return tmp_path / "catalog.db"


@pytest.fixture
def db_manager(db_path) -> Generator[DBManager, None, None]:
    """Open connection provider on an empty database (no schema)."""
    db = DBManager(db_path)
    yield db
    db.close()


@pytest.fixture
def repository(db_manager) -> GameRepository:
    """GameRepository with the schema created."""
    repo = GameRepository(db_manager)
    repo.init()
    return repo


@pytest.fixture
def sample_games() -> list[tuple[Game, list[str], list[str]]]:
    """(game, genres, platforms) triples for testing."""
    return [
        (
            Game(
                title="Hades",
                description="Escape the underworld.",
                release_date=date(2020, 9, 17),
                developer="Supergiant Games",
                publisher="Supergiant Games",
                rating=9.3,
            ),
            ["Roguelike", "Action"],
            ["Switch", "PC"],
        ),
        (
            Game(title="Celeste", developer="Maddy Makes Games", rating=9.1),
            ["Platformer", "Action"],
            ["PC"],
        ),
        (
            Game(title="Tetris"),
            [],
            [],
        ),
    ]
