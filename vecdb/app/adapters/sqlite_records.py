"""SQLite-backed record store implementing RecordStorePort.

Storage:
  - One ``records`` table: autoincrement id, unique text, raw vector bytes
  - One ``store_meta`` key/value table pinning the store's dimensionality
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator, Sequence
from pathlib import Path

from vecdb.app.ports.record_store import Record, RecordStorePort
from vecdb.errors import DimensionMismatchError, DuplicateKeyError
from vecdb.utils.vector_codec import decode_vector, dimensions_of, encode_vector

logger = logging.getLogger(__name__)

# Largest value a SQLite INTEGER column can hold.
_SQLITE_MAX_INT = 2**63 - 1

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS records (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        text TEXT NOT NULL UNIQUE,
        vector BLOB NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS store_meta (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    );
    """,
)


class SQLiteRecordStore(RecordStorePort):
    """Record store persisted to a single SQLite database file."""

    def __init__(self, db_path: Path, *, dimensions: int) -> None:
        self.db_path = Path(db_path)
        self._dim = int(dimensions)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        # Access is serialized by the owning SimilarityStore.
        self._conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        try:
            self.ensure_schema()
        except Exception:
            self._conn.close()
            raise

    @property
    def dimensions(self) -> int:
        return self._dim

    def ensure_schema(self) -> None:
        """Create tables if absent and pin (or verify) the dimensionality."""
        cur = self._conn.cursor()
        for statement in _SCHEMA:
            cur.execute(statement)
        row = cur.execute("SELECT value FROM store_meta WHERE key = 'dimensions'").fetchone()
        if row is None:
            cur.execute(
                "INSERT INTO store_meta(key, value) VALUES('dimensions', ?)",
                (str(self._dim),),
            )
        elif int(row[0]) != self._dim:
            self._conn.rollback()
            raise DimensionMismatchError(
                f"Record store {self.db_path} holds {row[0]}-dimensional vectors; "
                f"embedder produces {self._dim}"
            )
        self._conn.commit()

    def find_by_text(self, text: str) -> Record | None:
        row = self._conn.execute(
            "SELECT id, text, vector FROM records WHERE text = ?", (text,)
        ).fetchone()
        return self._to_record(row)

    def find_by_id(self, record_id: int) -> Record | None:
        record_id = int(record_id)
        if not 0 < record_id <= _SQLITE_MAX_INT:
            return None
        row = self._conn.execute(
            "SELECT id, text, vector FROM records WHERE id = ?", (record_id,)
        ).fetchone()
        return self._to_record(row)

    def insert_new(self, text: str, vector: Sequence[float]) -> int:
        if len(vector) != self._dim:
            raise DimensionMismatchError(
                f"Vector has {len(vector)} components; store expects {self._dim}"
            )
        blob = encode_vector(vector)
        try:
            with self._conn:
                cur = self._conn.execute(
                    "INSERT INTO records(text, vector) VALUES(?, ?)",
                    (text, sqlite3.Binary(blob)),
                )
        except sqlite3.IntegrityError as exc:
            raise DuplicateKeyError(f"Text already stored: {text!r}") from exc

        record_id = cur.lastrowid
        if record_id is None:  # pragma: no cover - sqlite always sets it on INSERT
            raise RuntimeError("SQLite did not report an id for the inserted row")
        logger.debug("Inserted record %d", record_id)
        return int(record_id)

    def iter_ids(self) -> Iterator[int]:
        for (record_id,) in self._conn.execute("SELECT id FROM records ORDER BY id").fetchall():
            yield int(record_id)

    def count(self) -> int:
        return int(self._conn.execute("SELECT COUNT(*) FROM records").fetchone()[0])

    def close(self) -> None:
        self._conn.close()

    def _to_record(self, row: tuple | None) -> Record | None:
        if row is None:
            return None
        record_id, text, blob = row
        if dimensions_of(blob) != self._dim:
            raise DimensionMismatchError(
                f"Record {record_id} holds {dimensions_of(blob)} components; "
                f"store expects {self._dim}"
            )
        return Record(id=int(record_id), text=text, vector=decode_vector(blob))
