"""
Row-oriented table store on SQLite.

Each named table is an ordered list of rows addressed by 1-based position:
row 1 is the header, rows 2.. are data. Positions are derived from insertion
order, so deleting a row shifts every later row up by one.
"""

import json
import logging
import sqlite3
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Sequence

from tracker_api.errors import StorageError

logger = logging.getLogger(__name__)


class TableStore:
    """SQLite-backed table accessor with per-table locks."""

    def __init__(self, db_path: str = "tracker.db"):
        self.db_path = db_path
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection"""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        conn = None
        try:
            conn = self._get_connection()
            cursor = conn.cursor()
            yield cursor
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Table store operation failed: {e}")
            raise StorageError(f"Storage failure: {e}") from e
        finally:
            if conn is not None:
                conn.close()

    @staticmethod
    def _serialize_row(values: Sequence[str]) -> str:
        return json.dumps(["" if value is None else str(value) for value in values])

    def init_tables(self) -> None:
        """Create the backing schema"""
        with self._cursor() as cursor:
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS record_tables (
                    name TEXT PRIMARY KEY,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS table_rows (
                    row_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    table_name TEXT NOT NULL,
                    cells TEXT NOT NULL,
                    FOREIGN KEY (table_name) REFERENCES record_tables(name) ON DELETE CASCADE
                )
            ''')
            cursor.execute('''
                CREATE INDEX IF NOT EXISTS idx_table_rows_table
                ON table_rows(table_name, row_id)
            ''')
        logger.info(f"Table store initialized at {self.db_path}")

    @contextmanager
    def lock(self, name: str) -> Iterator[None]:
        """Hold the named table's lock for a read-then-write sequence."""
        with self._locks_guard:
            table_lock = self._locks.setdefault(name, threading.RLock())
        with table_lock:
            yield

    def table_exists(self, name: str) -> bool:
        with self._cursor() as cursor:
            cursor.execute('SELECT 1 FROM record_tables WHERE name = ?', (name,))
            return cursor.fetchone() is not None

    def ensure_table(self, name: str, header: Sequence[str]) -> None:
        """Create the table if absent and make sure its first row is the header."""
        with self.lock(name), self._cursor() as cursor:
            cursor.execute('INSERT OR IGNORE INTO record_tables (name) VALUES (?)', (name,))
            cursor.execute('SELECT COUNT(*) FROM table_rows WHERE table_name = ?', (name,))
            if cursor.fetchone()[0] == 0:
                cursor.execute(
                    'INSERT INTO table_rows (table_name, cells) VALUES (?, ?)',
                    (name, self._serialize_row(header))
                )
                logger.info(f"Created table '{name}' with header")

    def last_row(self, name: str) -> int:
        """Position of the last row, 0 for a missing or empty table."""
        with self._cursor() as cursor:
            cursor.execute('SELECT COUNT(*) FROM table_rows WHERE table_name = ?', (name,))
            return cursor.fetchone()[0]

    def get_rows(self, name: str) -> List[List[str]]:
        """All rows in order, header first."""
        with self._cursor() as cursor:
            cursor.execute(
                'SELECT cells FROM table_rows WHERE table_name = ? ORDER BY row_id',
                (name,)
            )
            return [json.loads(row["cells"]) for row in cursor.fetchall()]

    def get_column(self, name: str, column: int) -> List[str]:
        """Values of a 0-based column for every data row."""
        return [row[column] if column < len(row) else "" for row in self.get_rows(name)[1:]]

    def append_row(self, name: str, values: Sequence[str]) -> int:
        """Append a row and return its position."""
        with self._cursor() as cursor:
            cursor.execute(
                'INSERT INTO table_rows (table_name, cells) VALUES (?, ?)',
                (name, self._serialize_row(values))
            )
            cursor.execute('SELECT COUNT(*) FROM table_rows WHERE table_name = ?', (name,))
            return cursor.fetchone()[0]

    def _row_id_at(self, cursor: sqlite3.Cursor, name: str, index: int) -> Optional[int]:
        if index < 1:
            return None
        cursor.execute(
            'SELECT row_id FROM table_rows WHERE table_name = ? ORDER BY row_id LIMIT 1 OFFSET ?',
            (name, index - 1)
        )
        row = cursor.fetchone()
        return row["row_id"] if row else None

    def get_row(self, name: str, index: int) -> Optional[List[str]]:
        with self._cursor() as cursor:
            row_id = self._row_id_at(cursor, name, index)
            if row_id is None:
                return None
            cursor.execute('SELECT cells FROM table_rows WHERE row_id = ?', (row_id,))
            return json.loads(cursor.fetchone()["cells"])

    def update_row(self, name: str, index: int, values: Sequence[str]) -> bool:
        """Overwrite the row at `index`. Returns False when there is no such row."""
        with self._cursor() as cursor:
            row_id = self._row_id_at(cursor, name, index)
            if row_id is None:
                return False
            cursor.execute(
                'UPDATE table_rows SET cells = ? WHERE row_id = ?',
                (self._serialize_row(values), row_id)
            )
            return True

    def delete_row(self, name: str, index: int) -> bool:
        """Remove the row at `index`; later rows move up one position."""
        with self._cursor() as cursor:
            row_id = self._row_id_at(cursor, name, index)
            if row_id is None:
                return False
            cursor.execute('DELETE FROM table_rows WHERE row_id = ?', (row_id,))
            return True

    def list_tables(self) -> List[str]:
        with self._cursor() as cursor:
            cursor.execute('SELECT name FROM record_tables ORDER BY name')
            return [row["name"] for row in cursor.fetchall()]


def get_table_store(db_path: str = "tracker.db") -> TableStore:
    """Build a store and make sure its schema exists."""
    store = TableStore(db_path)
    store.init_tables()
    return store
