"""Single-game CRUD operations.

Handles add, get, update and delete for individual games, including
their genre and platform links.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from gamecatalog.core.db.connection import DBManager
from gamecatalog.core.db.models import GAME_COLUMNS, ReferenceKind, row_to_game
from gamecatalog.core.db.relations import RelationshipSynchronizer
from gamecatalog.core.game import Game, unique_names
from gamecatalog.utils.date_utils import format_release_date
from gamecatalog.utils.i18n import t

logger = logging.getLogger("gamecatalog.database")

__all__ = ["GameQueryMixin"]


def _game_params(game: Game) -> tuple[Any, ...]:
    """Column values for GAME_COLUMNS, in order."""
    return (
        game.title,
        game.description,
        format_release_date(game.release_date),
        game.developer,
        game.publisher,
        game.rating,
    )


class GameQueryMixin:
    """Mixin providing single-game CRUD operations.

    Requires GameRepository attributes: db, relations.
    """

    db: DBManager
    relations: RelationshipSynchronizer

    def add_game(
        self,
        game: Game,
        genres: Iterable[str] | None = (),
        platforms: Iterable[str] | None = (),
    ) -> int:
        """Insert a game and link its genres and platforms.

        The game row and both relation syncs run in one transaction:
        if any step fails nothing is written.

        Args:
            game: Game to insert; it is not modified. ``id``, ``created_at`` and the game's own
                ``genres``/``platforms`` fields are ignored.
            genres: Genre names; duplicates collapse.
            platforms: Platform names; duplicates collapse.

        Returns:
            The new game id.

        Raises:
            ValidationError: If the game or a name is invalid. Raised
                before anything is written.
        """
        game = game.validated()
        genre_names = unique_names(genres, "genres")
        platform_names = unique_names(platforms, "platforms")

        placeholders = ", ".join("?" * len(GAME_COLUMNS))
        with self.db.transaction():
            result = self.db.execute(
                f"INSERT INTO games ({', '.join(GAME_COLUMNS)}) VALUES ({placeholders})",
                _game_params(game),
            )
            game_id = result.lastrowid
            self.relations.attach(game_id, ReferenceKind.GENRE, genre_names)
            self.relations.attach(game_id, ReferenceKind.PLATFORM, platform_names)

        logger.info(t("logs.db.game_added", id=game_id, title=game.title))
        return game_id

    def get_game_by_id(self, game_id: int) -> Game | None:
        """Get a single game by id.

        Args:
            game_id: Game id.

        Returns:
            Game with genre and platform names ordered by name,
            or None if not found.
        """
        with self.db.transaction(read_only=True):
            row = self.db.query_one("SELECT * FROM games WHERE id = ?", (game_id,))
            if not row:
                return None

            genres = self.relations.names_for(game_id, ReferenceKind.GENRE)
            platforms = self.relations.names_for(game_id, ReferenceKind.PLATFORM)

        return row_to_game(row, genres, platforms)

    def update_game(
        self,
        game_id: int,
        game: Game,
        genres: Iterable[str] | None = None,
        platforms: Iterable[str] | None = None,
    ) -> bool:
        """Update an existing game, preserving created_at.

        A relation list that is given replaces that relation's links in
        full; None leaves the existing links untouched.

        Args:
            game_id: Game to update.
            game: New column values (``id`` is ignored).
            genres: Replacement genre names, or None.
            platforms: Replacement platform names, or None.

        Returns:
            True if the game existed and was updated.
        """
        game = game.validated()
        replacements = {
            ReferenceKind.GENRE: None if genres is None else unique_names(genres, "genres"),
            ReferenceKind.PLATFORM: None if platforms is None else unique_names(platforms, "platforms"),
        }

        assignments = ", ".join(f"{column} = ?" for column in GAME_COLUMNS)
        with self.db.transaction():
            result = self.db.execute(
                f"UPDATE games SET {assignments} WHERE id = ?",
                (*_game_params(game), game_id),
            )
            if result.rowcount == 0:
                return False

            for kind, names in replacements.items():
                if names is not None:
                    self.relations.detach_all(game_id, kind)
                    self.relations.attach(game_id, kind, names)

        logger.info(t("logs.db.game_updated", id=game_id))
        return True

    def delete_game(self, game_id: int) -> bool:
        """Delete a game and its genre/platform links.

        Links are removed explicitly as well as by the ON DELETE CASCADE,
        in the same transaction as the game row.

        Args:
            game_id: Game id.

        Returns:
            True if a game row was removed, False if the id did not exist.
        """
        with self.db.transaction():
            for kind in ReferenceKind:
                self.relations.detach_all(game_id, kind)
            result = self.db.execute("DELETE FROM games WHERE id = ?", (game_id,))

        deleted = result.rowcount > 0
        if deleted:
            logger.info(t("logs.db.game_deleted", id=game_id))
        return deleted

    def add_genres(self, game_id: int, names: Iterable[str]) -> None:
        """Link additional genres to an existing game (additive)."""
        self.relations.attach(game_id, ReferenceKind.GENRE, names)

    def add_platforms(self, game_id: int, names: Iterable[str]) -> None:
        """Link additional platforms to an existing game (additive)."""
        self.relations.attach(game_id, ReferenceKind.PLATFORM, names)

    def get_game_count(self) -> int:
        """Get total number of games in the database."""
        row = self.db.query_one("SELECT COUNT(*) FROM games")
        return row[0]
