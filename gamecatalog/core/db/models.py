"""Database data models and conversion functions.

Contains the reference-entity kinds (genre, platform) with their table
names, and the conversion from a ``games`` row to a Game.
"""

from __future__ import annotations

import enum
import sqlite3

from gamecatalog.core.game import Game
from gamecatalog.utils.date_utils import parse_release_date, parse_timestamp

__all__ = ["GAME_COLUMNS", "ReferenceKind", "row_to_game"]

# Writable columns of the games table, in statement order
GAME_COLUMNS = ("title", "description", "release_date", "developer", "publisher", "rating")


class ReferenceKind(str, enum.Enum):
    """A lookup entity linked to games through a junction table.

    Table and column names are derived from the member value, so they
    are only ever built from this closed set.
    """

    GENRE = "genre"
    PLATFORM = "platform"

    @property
    def table(self) -> str:
        """Lookup table, e.g. 'genres'."""
        return f"{self.value}s"

    @property
    def junction(self) -> str:
        """Junction table, e.g. 'game_genres'."""
        return f"game_{self.value}s"

    @property
    def column(self) -> str:
        """Junction column referencing the lookup table, e.g. 'genre_id'."""
        return f"{self.value}_id"


def row_to_game(row: sqlite3.Row, genres: list[str], platforms: list[str]) -> Game:
    """Convert a ``games`` row plus its relation names to a Game.

    Args:
        row: Row from ``SELECT * FROM games``.
        genres: Linked genre names, already ordered.
        platforms: Linked platform names, already ordered.

    Returns:
        Game populated from the row.
    """
    return Game(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        release_date=parse_release_date(row["release_date"]),
        developer=row["developer"],
        publisher=row["publisher"],
        rating=row["rating"],
        created_at=parse_timestamp(row["created_at"]),
        genres=genres,
        platforms=platforms,
    )
