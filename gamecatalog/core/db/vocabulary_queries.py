"""Genre and platform vocabulary queries.

Handles listing known genre/platform names and explicit removal of
names no game links to any more.
"""

from __future__ import annotations

import logging

from gamecatalog.core.db.connection import DBManager
from gamecatalog.core.db.models import ReferenceKind
from gamecatalog.utils.i18n import t

logger = logging.getLogger("gamecatalog.database")

__all__ = ["VocabularyQueryMixin"]


class VocabularyQueryMixin:
    """Mixin providing genre/platform vocabulary queries.

    Requires GameRepository attributes: db.
    """

    db: DBManager

    def get_all_names(self, kind: ReferenceKind) -> list[str]:
        """Get every known name of one kind, sorted alphabetically.

        Includes names no game currently links to.
        """
        rows = self.db.query(f"SELECT name FROM {kind.table} ORDER BY name")
        return [row[0] for row in rows]

    def get_all_genre_names(self) -> list[str]:
        """Get all genre names, sorted alphabetically."""
        return self.get_all_names(ReferenceKind.GENRE)

    def get_all_platform_names(self) -> list[str]:
        """Get all platform names, sorted alphabetically."""
        return self.get_all_names(ReferenceKind.PLATFORM)

    def prune_orphans(self) -> dict[str, int]:
        """Delete genres and platforms that no game links to.

        Orphans are otherwise kept so the vocabulary survives game
        deletion; this is never run implicitly.

        Returns:
            Dict mapping table name to number of rows removed.
        """
        removed: dict[str, int] = {}
        with self.db.transaction():
            for kind in ReferenceKind:
                result = self.db.execute(
                    f"""
                    DELETE FROM {kind.table}
                    WHERE NOT EXISTS (
                        SELECT 1 FROM {kind.junction} j WHERE j.{kind.column} = {kind.table}.id
                    )
                    """
                )
                removed[kind.table] = result.rowcount

        logger.info(t("logs.db.orphans_pruned", genres=removed["genres"], platforms=removed["platforms"]))
        return removed
