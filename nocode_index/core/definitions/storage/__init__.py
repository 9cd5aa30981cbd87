from .sqlite_store import SQLiteDefinitionStore

__all__ = ["SQLiteDefinitionStore"]
