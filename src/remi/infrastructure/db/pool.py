"""Bounded pool of SQLite connections to one database file."""

import logging
import queue
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from remi.errors import ConnectionPoolExhausted, DatabaseError

_logger = logging.getLogger(__name__)


class ConnectionPool:
    """Hands out at most ``pool_size`` connections, opening them on demand.

    ``connection()`` commits when the block succeeds and rolls back when it
    raises. ``sqlite3.Error`` leaves the block as :class:`DatabaseError`.
    """

    def __init__(self, db_path: Path, pool_size: int = 2, timeout: float = 5.0):
        self._db_path = Path(db_path)
        self._pool_size = pool_size
        self._timeout = timeout
        self._idle: "queue.LifoQueue[sqlite3.Connection]" = queue.LifoQueue()
        self._opened: List[sqlite3.Connection] = []
        self._lock = threading.Lock()

    @property
    def db_path(self) -> Path:
        return self._db_path

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        conn = self._checkout()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise DatabaseError(f"{self._db_path.name}: {exc}") from exc
        except BaseException:
            conn.rollback()
            raise
        finally:
            self._idle.put(conn)

    def close_all(self):
        """Close idle connections and forget them; later checkouts reopen."""
        with self._lock:
            while True:
                try:
                    conn = self._idle.get_nowait()
                except queue.Empty:
                    break
                conn.close()
                self._opened.remove(conn)
            _logger.debug("Closed pool for %s (%d still checked out)", self._db_path, len(self._opened))

    # --- Internals ---

    def _checkout(self) -> sqlite3.Connection:
        try:
            return self._idle.get_nowait()
        except queue.Empty:
            pass

        with self._lock:
            if len(self._opened) < self._pool_size:
                conn = self._open()
                self._opened.append(conn)
                return conn

        try:
            return self._idle.get(timeout=self._timeout)
        except queue.Empty:
            raise ConnectionPoolExhausted(
                f"All {self._pool_size} connections to {self._db_path.name} "
                f"stayed busy for {self._timeout}s"
            ) from None

    def _open(self) -> sqlite3.Connection:
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self._db_path, check_same_thread=False)
        except (OSError, sqlite3.Error) as exc:
            raise DatabaseError(f"Cannot open {self._db_path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        _logger.debug("Opened connection %d/%d to %s", len(self._opened) + 1, self._pool_size, self._db_path)
        return conn
