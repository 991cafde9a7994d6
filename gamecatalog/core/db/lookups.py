"""Lookup-or-create resolution for genre and platform names.

Maps a name to its row id, inserting the row on first reference.
"""

from __future__ import annotations

import logging

from gamecatalog.core.db.connection import DBManager
from gamecatalog.core.db.models import ReferenceKind
from gamecatalog.core.errors import ConstraintKind, ConstraintViolationError, ValidationError
from gamecatalog.utils.i18n import t

logger = logging.getLogger("gamecatalog.database")

__all__ = ["LookupResolver"]


class LookupResolver:
    """Resolves genre/platform names to ids, creating rows as needed.

    Stateless apart from the injected connection provider.
    """

    def __init__(self, db: DBManager) -> None:
        self.db = db

    def find(self, kind: ReferenceKind, name: str) -> int | None:
        """Look up a name without creating it.

        Args:
            kind: Genre or platform.
            name: Exact, case-sensitive name.

        Returns:
            Row id or None if not found.
        """
        row = self.db.query_one(f"SELECT id FROM {kind.table} WHERE name = ?", (name,))
        return row[0] if row else None

    def resolve(self, kind: ReferenceKind, name: str) -> int:
        """Return the id for ``name``, inserting a new row if absent.

        If a concurrent writer inserts the same name between our lookup
        and our insert, the uniqueness violation is absorbed and the
        existing row's id is returned.

        Args:
            kind: Genre or platform.
            name: Non-empty name, matched exactly.

        Returns:
            Row id of the existing or newly created row.

        Raises:
            ValidationError: If name is empty.
            ConstraintViolationError: On any integrity failure other than
                the duplicate-name race.
        """
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(f"{kind.value} name must be a non-empty string", field=kind.table)

        existing = self.find(kind, name)
        if existing is not None:
            return existing

        try:
            # Savepoint so a failed insert leaves any enclosing transaction usable
            with self.db.transaction():
                result = self.db.execute(f"INSERT INTO {kind.table} (name) VALUES (?)", (name,))
        except ConstraintViolationError as e:
            if e.kind is not ConstraintKind.UNIQUE:
                raise
            existing = self.find(kind, name)
            if existing is None:
                raise
            logger.debug(t("logs.db.lookup_race", kind=kind.value, name=name))
            return existing

        logger.debug(t("logs.db.lookup_created", kind=kind.value, name=name, id=result.lastrowid))
        return result.lastrowid
