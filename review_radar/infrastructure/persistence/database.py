"""
SQLite Database Repository - Analysis Persistence
==================================================

Stores one analysis per place_id. Records are write-once: a second save
for the same place_id keeps the first row and returns it.
"""

import json
import sqlite3
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from ...domain.errors import PersistenceFailure
from ...domain.models import AnalysisRecord, AnalysisSummary, ClassifiedReview

logger = logging.getLogger(__name__)

DATABASE_FILE = "reviewradar.db"


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with microseconds, sortable as text."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


class AnalysisRepository:
    """
    SQLite store for place analyses.

    Usage:
        repo = AnalysisRepository()
        repo.init()

        stored = repo.save_if_absent(record)
        cached = repo.get_by_place_id("ChIJ...")
        history = repo.list_recent(limit=20)
    """

    def __init__(self, db_path: Union[str, Path] = DATABASE_FILE):
        self.db_path = str(db_path)

    @contextmanager
    def _get_connection(self):
        """Get database connection with context manager."""
        try:
            conn = sqlite3.connect(self.db_path, timeout=30)
        except sqlite3.Error as e:
            logger.error(f"Cannot open database {self.db_path}: {e}")
            raise PersistenceFailure(detail=str(e)) from e

        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Database error on {self.db_path}: {e}")
            raise PersistenceFailure(detail=str(e)) from e
        finally:
            conn.close()

    def init(self):
        """Initialize database tables."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS analyses (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    place_id TEXT NOT NULL UNIQUE,
                    input TEXT NOT NULL,
                    place_name TEXT NOT NULL,
                    summary TEXT NOT NULL,
                    reviews TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_analyses_created_at ON analyses (created_at)"
            )
        logger.info(f"Database initialized: {self.db_path}")

    def get_by_place_id(self, place_id: str) -> Optional[AnalysisRecord]:
        """Get the stored analysis for a place, or None."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM analyses WHERE place_id = ?", (place_id,)
            ).fetchone()
            return self._row_to_record(row) if row else None

    def save_if_absent(self, record: AnalysisRecord) -> AnalysisRecord:
        """
        Insert the record unless the place already has one.

        Returns:
            The stored record: the new row, or the existing one when
            another request got there first.
        """
        created_at = record.created_at or utc_timestamp()

        with self._get_connection() as conn:
            cursor = conn.execute(
                """INSERT INTO analyses (place_id, input, place_name, summary, reviews, created_at)
                   VALUES (?, ?, ?, ?, ?, ?)
                   ON CONFLICT(place_id) DO NOTHING""",
                (
                    record.place_id,
                    record.input,
                    record.place_name,
                    json.dumps(record.summary.to_dict()),
                    json.dumps([review.to_dict() for review in record.reviews]),
                    created_at,
                )
            )
            if cursor.rowcount == 0:
                logger.info(f"Analysis for {record.place_id} already stored, keeping existing record")

            row = conn.execute(
                "SELECT * FROM analyses WHERE place_id = ?", (record.place_id,)
            ).fetchone()

        if row is None:
            raise PersistenceFailure(detail=f"record for {record.place_id} missing after insert")
        return self._row_to_record(row)

    def list_recent(self, limit: Optional[int] = None) -> List[AnalysisRecord]:
        """All analyses, most recent first."""
        with self._get_connection() as conn:
            if limit is not None:
                rows = conn.execute(
                    "SELECT * FROM analyses ORDER BY created_at DESC, id DESC LIMIT ?",
                    (limit,)
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM analyses ORDER BY created_at DESC, id DESC"
                ).fetchall()
            return [self._row_to_record(row) for row in rows]

    def count(self) -> int:
        with self._get_connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM analyses").fetchone()[0]

    def _row_to_record(self, row: sqlite3.Row) -> AnalysisRecord:
        """Convert database row to AnalysisRecord."""
        try:
            summary = AnalysisSummary.from_dict(json.loads(row["summary"]))
            reviews = tuple(ClassifiedReview.from_dict(item) for item in json.loads(row["reviews"]))
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Corrupt analysis row {row['id']}: {e}")
            raise PersistenceFailure(detail=f"corrupt row {row['id']}: {e}") from e

        return AnalysisRecord(
            id=row["id"],
            input=row["input"],
            place_name=row["place_name"],
            place_id=row["place_id"],
            summary=summary,
            reviews=reviews,
            created_at=row["created_at"],
        )


def init_database(db_path: Union[str, Path] = DATABASE_FILE) -> AnalysisRepository:
    """Create the repository and make sure its tables exist."""
    repo = AnalysisRepository(db_path)
    repo.init()
    return repo
