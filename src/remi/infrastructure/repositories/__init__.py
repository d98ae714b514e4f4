from .sqlite_nook_repository import SQLiteNookRepository

__all__ = ["SQLiteNookRepository"]
