"""Database module - game repository built from query mixins.

All mixins compose into the GameRepository class via multiple
inheritance. The connection provider is injected, never created here;
call ``init()`` once to create the schema.
"""

from __future__ import annotations

from gamecatalog.core.db.connection import DBManager, ExecuteResult
from gamecatalog.core.db.game_batch_queries import GameBatchQueryMixin
from gamecatalog.core.db.game_queries import GameQueryMixin
from gamecatalog.core.db.lookups import LookupResolver
from gamecatalog.core.db.models import ReferenceKind
from gamecatalog.core.db.relations import RelationshipSynchronizer
from gamecatalog.core.db.schema import SchemaMixin
from gamecatalog.core.db.vocabulary_queries import VocabularyQueryMixin

__all__ = [
    "DBManager",
    "ExecuteResult",
    "GameRepository",
    "LookupResolver",
    "ReferenceKind",
    "RelationshipSynchronizer",
]


class GameRepository(
    SchemaMixin,
    GameQueryMixin,
    GameBatchQueryMixin,
    VocabularyQueryMixin,
):
    """Main repository class composing all query mixins.

    Holds no state beyond the injected connection provider and the
    resolver/synchronizer built on it.
    """

    SCHEMA_VERSION = 1

    def __init__(self, db: DBManager) -> None:
        """Initialize the repository.

        Args:
            db: Connection provider shared by all operations.
        """
        self.db = db
        self.resolver = LookupResolver(db)
        self.relations = RelationshipSynchronizer(db, self.resolver)
