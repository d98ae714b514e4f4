import logging
import sqlite3
from datetime import datetime
from typing import List, Optional

from remi.domain.models import Nook
from remi.domain.repositories import INookRepository
from remi.errors import InvalidNookNameError, NookNameConflictError, NookNotFoundError
from remi.infrastructure.db.pool import ConnectionPool

_logger = logging.getLogger(__name__)


class SQLiteNookRepository(INookRepository):
    def __init__(self, pool: ConnectionPool):
        self._pool = pool
        self._init_table()

    def _init_table(self):
        with self._pool.connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS nooks (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    url TEXT NOT NULL UNIQUE,
                    icon TEXT,
                    color TEXT,
                    created_at TEXT
                )
            """)
            # Names are unique regardless of case.
            conn.execute(
                "CREATE UNIQUE INDEX IF NOT EXISTS idx_nooks_name ON nooks (name COLLATE NOCASE)"
            )

    def fetch_all(self) -> List[Nook]:
        with self._pool.connection() as conn:
            rows = conn.execute("SELECT * FROM nooks").fetchall()
        return [self._map_row_to_nook(row) for row in rows]

    def get(self, id: str) -> Optional[Nook]:
        with self._pool.connection() as conn:
            row = conn.execute("SELECT * FROM nooks WHERE id = ?", (id,)).fetchone()
        return self._map_row_to_nook(row) if row else None

    def create(self, name: str) -> Optional[Nook]:
        nook = Nook.create(self._validate_name(name))
        with self._pool.connection() as conn:
            try:
                conn.execute(
                    "INSERT INTO nooks (id, name, url, created_at) VALUES (?, ?, ?, ?)",
                    (nook.id, nook.name, nook.url, datetime.now().isoformat()),
                )
            except sqlite3.IntegrityError as exc:
                raise NookNameConflictError(f"A nook named '{name}' already exists.") from exc
        _logger.info("Created nook '%s' (%s)", nook.name, nook.id)
        return self.get(nook.id)

    def delete(self, nook: Nook) -> None:
        with self._pool.connection() as conn:
            cursor = conn.execute("DELETE FROM nooks WHERE id = ?", (nook.id,))
            deleted = cursor.rowcount
        if not deleted:
            raise NookNotFoundError(f"Nook '{nook.name}' ({nook.id}) does not exist.")
        _logger.info("Deleted nook '%s' (%s)", nook.name, nook.id)

    def rename(self, nook: Nook, new_name: str) -> Optional[Nook]:
        new_name = self._validate_name(new_name)
        with self._pool.connection() as conn:
            try:
                cursor = conn.execute(
                    "UPDATE nooks SET name = ? WHERE id = ?", (new_name, nook.id)
                )
            except sqlite3.IntegrityError as exc:
                raise NookNameConflictError(f"A nook named '{new_name}' already exists.") from exc
            updated = cursor.rowcount
        if not updated:
            raise NookNotFoundError(f"Nook '{nook.name}' ({nook.id}) does not exist.")
        _logger.info("Renamed nook '%s' to '%s'", nook.name, new_name)
        return self.get(nook.id)

    def update(self, nook: Nook) -> Optional[Nook]:
        with self._pool.connection() as conn:
            cursor = conn.execute(
                "UPDATE nooks SET icon = ?, color = ? WHERE id = ?",
                (nook.icon, nook.color, nook.id),
            )
            updated = cursor.rowcount
        if not updated:
            raise NookNotFoundError(f"Nook '{nook.name}' ({nook.id}) does not exist.")
        return self.get(nook.id)

    @staticmethod
    def _validate_name(name: str) -> str:
        cleaned = name.strip()
        if not cleaned:
            raise InvalidNookNameError("Nook names cannot be empty.")
        if "/" in cleaned:
            raise InvalidNookNameError(f"Nook names cannot contain '/': {name!r}")
        return cleaned

    def _map_row_to_nook(self, row) -> Nook:
        return Nook(
            id=row["id"],
            name=row["name"],
            url=row["url"],
            icon=row["icon"],
            color=row["color"],
        )
