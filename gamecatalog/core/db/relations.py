"""Junction-table maintenance for game genres and platforms.

Attaches names to a game through the lookup resolver, and reads the
linked names back singly or in batches.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from gamecatalog.core.db.connection import DBManager
from gamecatalog.core.db.lookups import LookupResolver
from gamecatalog.core.db.models import ReferenceKind
from gamecatalog.core.game import unique_names
from gamecatalog.utils.i18n import t

logger = logging.getLogger("gamecatalog.database")

__all__ = ["RelationshipSynchronizer"]

# Stays below SQLite's default bound-parameter limit on older builds
_MAX_BATCH = 900


class RelationshipSynchronizer:
    """Keeps game_genres / game_platforms in step with name lists."""

    def __init__(self, db: DBManager, resolver: LookupResolver | None = None) -> None:
        self.db = db
        self.resolver = resolver or LookupResolver(db)

    def attach(self, game_id: int, kind: ReferenceKind, names: Iterable[str]) -> None:
        """Link ``names`` to a game. Additive and idempotent.

        Duplicate names collapse; links that already exist are left alone.
        Runs in one transaction scope, so a failure also discards any
        lookup rows created along the way.

        Args:
            game_id: Existing game id.
            kind: Genre or platform.
            names: Names to link.

        Raises:
            ValidationError: If any name is empty.
            ConstraintViolationError: If the game does not exist
                (kind FOREIGN_KEY).
        """
        unique = unique_names(names, kind.table)
        if not unique:
            return

        with self.db.transaction():
            ref_ids = [self.resolver.resolve(kind, name) for name in unique]
            self.db.executemany(
                f"INSERT OR IGNORE INTO {kind.junction} (game_id, {kind.column}) VALUES (?, ?)",
                [(game_id, ref_id) for ref_id in ref_ids],
            )

        logger.debug(t("logs.db.links_attached", count=len(unique), kind=kind.value, game_id=game_id))

    def detach_all(self, game_id: int, kind: ReferenceKind) -> int:
        """Remove every link of one kind from a game.

        Lookup rows are kept; see ``GameRepository.prune_orphans``.

        Returns:
            Number of links removed.
        """
        result = self.db.execute(f"DELETE FROM {kind.junction} WHERE game_id = ?", (game_id,))
        return result.rowcount

    def names_for(self, game_id: int, kind: ReferenceKind) -> list[str]:
        """Get linked names for a game, ordered by name."""
        rows = self.db.query(
            f"""
            SELECT r.name FROM {kind.junction} j
            JOIN {kind.table} r ON r.id = j.{kind.column}
            WHERE j.game_id = ?
            ORDER BY r.name
            """,
            (game_id,),
        )
        return [row[0] for row in rows]

    def names_for_many(self, game_ids: list[int], kind: ReferenceKind) -> dict[int, list[str]]:
        """Batch load linked names for multiple games.

        Args:
            game_ids: List of game ids.
            kind: Genre or platform.

        Returns:
            Dict mapping game id to names ordered by name. Games without
            links are absent.
        """
        result: dict[int, list[str]] = {}
        for start in range(0, len(game_ids), _MAX_BATCH):
            chunk = game_ids[start : start + _MAX_BATCH]
            placeholders = ",".join("?" * len(chunk))
            rows = self.db.query(
                f"""
                SELECT j.game_id, r.name FROM {kind.junction} j
                JOIN {kind.table} r ON r.id = j.{kind.column}
                WHERE j.game_id IN ({placeholders})
                ORDER BY j.game_id, r.name
                """,
                chunk,
            )
            for row in rows:
                result.setdefault(row[0], []).append(row[1])
        return result
