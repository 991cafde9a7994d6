"""Batch game query operations.

Handles bulk loading of games and their relations using one query per
relation kind instead of N+1 patterns.
"""

from __future__ import annotations

import logging

from gamecatalog.core.db.connection import DBManager
from gamecatalog.core.db.models import ReferenceKind, row_to_game
from gamecatalog.core.db.relations import RelationshipSynchronizer
from gamecatalog.core.game import Game

logger = logging.getLogger("gamecatalog.database")

__all__ = ["GameBatchQueryMixin"]


class GameBatchQueryMixin:
    """Mixin providing batch game loading operations.

    Requires GameRepository attributes: db, relations.
    """

    db: DBManager
    relations: RelationshipSynchronizer

    def get_all_games(self) -> list[Game]:
        """Get all games, ordered by id, with genres and platforms.

        Returns:
            List of all games; empty if the catalog is empty.
        """
        with self.db.transaction(read_only=True):
            rows = self.db.query("SELECT * FROM games ORDER BY id")
            if not rows:
                return []

            game_ids = [row["id"] for row in rows]
            all_genres = self.relations.names_for_many(game_ids, ReferenceKind.GENRE)
            all_platforms = self.relations.names_for_many(game_ids, ReferenceKind.PLATFORM)

        return [
            row_to_game(row, all_genres.get(row["id"], []), all_platforms.get(row["id"], []))
            for row in rows
        ]
