from modion.adapters.sqlite.migrator import MIGRATIONS_DIR, SQLiteMigrator
from modion.adapters.sqlite.repos import (
    SQLiteArticleRepo,
    SQLiteContactRepo,
    SQLiteSubscriberRepo,
    SQLiteUserRepo,
)

__all__ = [
    "MIGRATIONS_DIR",
    "SQLiteMigrator",
    "SQLiteArticleRepo",
    "SQLiteContactRepo",
    "SQLiteSubscriberRepo",
    "SQLiteUserRepo",
]
