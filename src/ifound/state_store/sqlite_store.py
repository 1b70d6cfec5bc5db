"""
SQLite-backed persistence for the lost-and-found store.

The entire store lives in one named record of a key-value table:

    records(key TEXT PRIMARY KEY, value TEXT NOT NULL, updated_at TEXT NOT NULL)

Every public service operation is load -> mutate -> save (or load -> read).
There is no cross-call transaction: two independent callers that both load,
mutate and save will race, and the later save silently replaces the earlier
one (last write wins). Callers needing more must serialize access themselves.
"""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ..schemas import Store, utc_now_iso
from .codec import StoreDecodeError, decode_store, encode_store

logger = logging.getLogger(__name__)

DEFAULT_RECORD_KEY = "ifound_store_v1"


class StateStore:
    """
    Load-or-initialize access to the persisted store blob.

    A missing or unreadable blob is replaced by an empty store. This is a
    deliberate lossy recovery: the corrupt blob is overwritten.
    """

    def __init__(self, db_path: Path | str, record_key: str = DEFAULT_RECORD_KEY):
        """
        Initialize state store.

        Args:
            db_path: Path to SQLite database file
            record_key: Name of the record holding the store blob
        """
        self.db_path = Path(db_path)
        self.record_key = record_key
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection with row factory."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database transactions."""
        conn = self._get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS records (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """
            )

    # Raw record access

    def get_raw(self) -> str | None:
        """Return the stored blob text, or None if absent."""
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT value FROM records WHERE key = ?", (self.record_key,)
            ).fetchone()
            return row["value"] if row else None

    def put_raw(self, text: str) -> None:
        """Replace the stored blob text in a single transaction."""
        with self._transaction() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO records (key, value, updated_at)
                VALUES (?, ?, ?)
            """,
                (self.record_key, text, utc_now_iso()),
            )

    def clear(self) -> bool:
        """Delete the record. Returns True if one existed."""
        with self._transaction() as conn:
            cursor = conn.execute("DELETE FROM records WHERE key = ?", (self.record_key,))
            return cursor.rowcount > 0

    # Store access

    def load(self) -> Store:
        """
        Load the store, initializing an empty one if needed.

        An absent record or a blob that fails to decode is replaced by an
        empty store, which is saved before returning.
        """
        text = self.get_raw()
        if not text:
            logger.debug(f"No record '{self.record_key}' found, initializing empty store")
            return self._init_store()

        try:
            return decode_store(text)
        except StoreDecodeError as e:
            logger.warning(f"Discarding unreadable record '{self.record_key}': {e}")
            return self._init_store()

    def save(self, store: Store) -> None:
        """Write the full store, overwriting the previous blob."""
        self.put_raw(encode_store(store))

    def _init_store(self) -> Store:
        store = Store()
        self.save(store)
        return store
