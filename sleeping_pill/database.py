"""SQLite storage for the sleep counter"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from .config import config


SCHEMA = """
CREATE TABLE IF NOT EXISTS sleep_events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_sleep_events_timestamp ON sleep_events(timestamp);
"""

# Seconds SQLite keeps retrying a locked database before raising
BUSY_TIMEOUT = 10.0


class Database:
    """
    Owns the counter database file

    Nothing touches the disk until the first query, so a monitor that never
    puts the computer to sleep never creates the data directory.
    """

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path) if db_path else config.db_path
        self._ready = False

    def _prepare(self):
        if self._ready:
            return
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._open()
        try:
            conn.executescript(SCHEMA)
        finally:
            conn.close()
        self._ready = True

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=BUSY_TIMEOUT, isolation_level=None)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def get_connection(self):
        """
        Get an autocommit connection to the counter database

        Lock contention is handled by SQLite's busy timeout, which covers
        `BEGIN IMMEDIATE` and every statement, not only the connect.

        Yields:
            sqlite3.Connection: Database connection
        """
        self._prepare()
        conn = self._open()
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self):
        """Yields a connection whose statements commit together or not at all"""
        with self.get_connection() as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

    def fetch_one(self, query: str, params: tuple = ()):
        with self.get_connection() as conn:
            return conn.execute(query, params).fetchone()

    def fetch_all(self, query: str, params: tuple = ()):
        with self.get_connection() as conn:
            return conn.execute(query, params).fetchall()


# Global database instance
db = Database()
