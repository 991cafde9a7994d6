"""Database schema creation and versioning.

Handles initial schema creation from the bundled SQL file and
refuses databases written by a newer schema.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from gamecatalog.core.db.connection import DBManager
from gamecatalog.core.errors import CatalogError, SchemaError
from gamecatalog.utils.i18n import t

logger = logging.getLogger("gamecatalog.database")

__all__ = ["SchemaMixin"]


class SchemaMixin:
    """Mixin providing schema creation logic.

    Requires GameRepository attributes: db, SCHEMA_VERSION.
    """

    db: DBManager
    SCHEMA_VERSION: int

    def init(self) -> None:
        """Create the schema if missing. Safe to call repeatedly.

        Raises:
            SchemaError: If the schema file is missing or the database
                was written by a newer version.
        """
        current_version = self._get_schema_version()

        if current_version == 0:
            self._create_schema()
            self._set_schema_version(self.SCHEMA_VERSION)
        elif current_version > self.SCHEMA_VERSION:
            raise SchemaError(
                f"Database schema version {current_version} is newer than supported version {self.SCHEMA_VERSION}"
            )
        else:
            logger.debug(t("logs.db.schema_current", version=current_version))

    def _get_schema_version(self) -> int:
        """Get current database schema version (0 when uninitialised)."""
        try:
            row = self.db.query_one("SELECT MAX(version) FROM schema_version")
        except CatalogError as e:
            if "no such table" in e.message:
                return 0
            raise
        return row[0] if row and row[0] is not None else 0

    def _set_schema_version(self, version: int) -> None:
        """Set database schema version."""
        self.db.execute(
            """
            INSERT OR REPLACE INTO schema_version (version, applied_at, description)
            VALUES (?, ?, ?)
            """,
            (version, int(time.time()), t("logs.db.schema_created")),
        )

    def _create_schema(self) -> None:
        """Create initial database schema from SQL file."""
        schema_path = Path(__file__).parent / "schema.sql"
        try:
            with open(schema_path, encoding="utf-8") as f:
                schema_sql = f.read()
        except FileNotFoundError as e:
            logger.error(t("logs.db.schema_not_found", path=str(schema_path)))
            raise SchemaError(f"Schema file not found: {schema_path}") from e

        try:
            self.db.executescript(schema_sql)
        except CatalogError as e:
            logger.error(t("logs.db.schema_error", error=e.message))
            raise
        logger.info(t("logs.db.schema_created"))
