"""Analysis storage.

Table: analyses
- id (integer, primary key)
- url (text)
- title (text)
- domain (text)
- meta_tags, og_tags, twitter_tags (JSON text)
- scores (JSON text)
- recommendations (JSON text)
- analyzed_at (ISO-8601 UTC text)

``SQLiteAnalysisStore`` is what the API uses. ``MemoryAnalysisStore`` keeps
records in a dict and is handy for tests and throwaway runs.
"""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from models import AnalysisRecord, NewAnalysis

logger = logging.getLogger(__name__)

MAX_RECENT_LIMIT = 100

_JSON_COLUMNS = ("meta_tags", "og_tags", "twitter_tags", "scores", "recommendations")


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _clamp_limit(limit: int) -> int:
    return max(1, min(MAX_RECENT_LIMIT, int(limit)))


class AnalysisStore(Protocol):
    def get(self, analysis_id: int) -> AnalysisRecord | None: ...

    def get_by_url(self, url: str) -> AnalysisRecord | None: ...

    def create(self, analysis: NewAnalysis) -> AnalysisRecord: ...

    def list_recent(self, limit: int = 10) -> list[AnalysisRecord]: ...

    def delete(self, analysis_id: int) -> bool: ...

    def clear(self) -> None: ...


class SQLiteAnalysisStore:
    def __init__(self, db_path: Path | str) -> None:
        self.db_path = db_path

    def get_connection(self) -> sqlite3.Connection:
        """Return a connection to the SQLite database."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create the analyses table if it does not exist."""
        conn = self.get_connection()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS analyses (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    url TEXT NOT NULL,
                    title TEXT,
                    domain TEXT NOT NULL,
                    meta_tags TEXT NOT NULL,
                    og_tags TEXT NOT NULL,
                    twitter_tags TEXT NOT NULL,
                    scores TEXT NOT NULL,
                    recommendations TEXT NOT NULL,
                    analyzed_at TEXT NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_analyses_url ON analyses (url)")
            conn.commit()
        finally:
            conn.close()
        logger.info("Analysis store ready at %s", self.db_path)

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> AnalysisRecord:
        record = {key: row[key] for key in row.keys()}
        for column in _JSON_COLUMNS:
            record[column] = json.loads(record[column])
        return record  # type: ignore[return-value]

    def get(self, analysis_id: int) -> AnalysisRecord | None:
        """Fetch an analysis by id. Returns None when it does not exist."""
        conn = self.get_connection()
        try:
            row = conn.execute("SELECT * FROM analyses WHERE id = ?", (analysis_id,)).fetchone()
            return self._row_to_record(row) if row is not None else None
        finally:
            conn.close()

    def get_by_url(self, url: str) -> AnalysisRecord | None:
        """Return the most recent analysis of ``url``, if any."""
        conn = self.get_connection()
        try:
            row = conn.execute(
                "SELECT * FROM analyses WHERE url = ? ORDER BY id DESC LIMIT 1",
                (url,),
            ).fetchone()
            return self._row_to_record(row) if row is not None else None
        finally:
            conn.close()

    def create(self, analysis: NewAnalysis) -> AnalysisRecord:
        """Store a new analysis and return it with its id and timestamp."""
        analyzed_at = _utc_now()
        conn = self.get_connection()
        try:
            cursor = conn.execute(
                """
                INSERT INTO analyses (
                    url, title, domain, meta_tags, og_tags, twitter_tags,
                    scores, recommendations, analyzed_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    analysis["url"],
                    analysis["title"],
                    analysis["domain"],
                    *(json.dumps(analysis[column]) for column in _JSON_COLUMNS),
                    analyzed_at,
                ),
            )
            conn.commit()
            analysis_id = cursor.lastrowid
        finally:
            conn.close()
        return {**analysis, "id": analysis_id, "analyzed_at": analyzed_at}

    def list_recent(self, limit: int = 10) -> list[AnalysisRecord]:
        """Return the newest analyses first."""
        conn = self.get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM analyses ORDER BY analyzed_at DESC, id DESC LIMIT ?",
                (_clamp_limit(limit),),
            ).fetchall()
            return [self._row_to_record(row) for row in rows]
        finally:
            conn.close()

    def delete(self, analysis_id: int) -> bool:
        conn = self.get_connection()
        try:
            cursor = conn.execute("DELETE FROM analyses WHERE id = ?", (analysis_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def clear(self) -> None:
        conn = self.get_connection()
        try:
            conn.execute("DELETE FROM analyses")
            conn.commit()
        finally:
            conn.close()


class MemoryAnalysisStore:
    def __init__(self) -> None:
        self._analyses: dict[int, AnalysisRecord] = {}
        self._next_id = 1

    def get(self, analysis_id: int) -> AnalysisRecord | None:
        return self._analyses.get(analysis_id)

    def get_by_url(self, url: str) -> AnalysisRecord | None:
        matches = [record for record in self._analyses.values() if record["url"] == url]
        return matches[-1] if matches else None

    def create(self, analysis: NewAnalysis) -> AnalysisRecord:
        record: AnalysisRecord = {**analysis, "id": self._next_id, "analyzed_at": _utc_now()}
        self._analyses[self._next_id] = record
        self._next_id += 1
        return record

    def list_recent(self, limit: int = 10) -> list[AnalysisRecord]:
        ordered = sorted(
            self._analyses.values(),
            key=lambda record: (record["analyzed_at"], record["id"]),
            reverse=True,
        )
        return ordered[: _clamp_limit(limit)]

    def delete(self, analysis_id: int) -> bool:
        return self._analyses.pop(analysis_id, None) is not None

    def clear(self) -> None:
        self._analyses.clear()
