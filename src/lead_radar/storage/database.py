"""SQLite database for signals and generated outreach responses."""

import json
import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional, List, Dict, Any, Generator, Union

from .models import OutreachResponse
from ..core.config import settings
from ..core.models import Signal, Platform, Priority, SignalStatus

logger = logging.getLogger(__name__)


class SignalDatabase:
    """SQLite store for normalized signals.

    Signals are append-only apart from their outreach status. Writes are
    serialized with a lock so scan worker threads can persist concurrently.
    """

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        """Initialize database connection."""
        if db_path is None:
            db_path = settings.db_path

        self.db_path = Path(db_path).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._write_lock = threading.Lock()

        self._init_db()

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with row factory."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_db(self):
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS signals (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    platform TEXT NOT NULL,
                    external_id TEXT,

                    title TEXT,
                    content TEXT NOT NULL,
                    url TEXT,
                    author TEXT,

                    engagement_score INTEGER DEFAULT 0,
                    comment_count INTEGER DEFAULT 0,
                    priority TEXT DEFAULT 'medium',
                    keywords_json TEXT,
                    source_subgroup TEXT,

                    status TEXT DEFAULT 'new',
                    created_at TIMESTAMP,
                    ingested_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS responses (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    signal_id INTEGER NOT NULL,
                    response_text TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,

                    FOREIGN KEY (signal_id) REFERENCES signals(id)
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_signals_created ON signals(created_at DESC)
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_signals_source ON signals(platform, external_id)
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_responses_signal ON responses(signal_id)
            """)

    def _row_to_signal(self, row: sqlite3.Row) -> Signal:
        """Convert a database row to a Signal."""
        return Signal(
            id=row["id"],
            platform=Platform(row["platform"]),
            external_id=row["external_id"],
            title=row["title"] or "",
            content=row["content"],
            url=row["url"] or "",
            author=row["author"] or "",
            engagement_score=row["engagement_score"] or 0,
            comment_count=row["comment_count"] or 0,
            priority=Priority(row["priority"]) if row["priority"] else Priority.MEDIUM,
            keywords=tuple(json.loads(row["keywords_json"])) if row["keywords_json"] else (),
            source_subgroup=row["source_subgroup"],
            status=SignalStatus(row["status"]) if row["status"] else SignalStatus.NEW,
            created_at=datetime.fromisoformat(row["created_at"]) if row["created_at"] else datetime.now(),
            ingested_at=datetime.fromisoformat(row["ingested_at"]) if row["ingested_at"] else None,
        )

    # === SIGNALS ===

    def insert_signal(self, signal: Signal) -> int:
        """Insert a signal. Returns its new id."""
        now = datetime.now()

        with self._write_lock, self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO signals (
                    platform, external_id, title, content, url, author,
                    engagement_score, comment_count, priority, keywords_json,
                    source_subgroup, status, created_at, ingested_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                signal.platform.value,
                signal.external_id,
                signal.title,
                signal.content,
                signal.url,
                signal.author,
                signal.engagement_score,
                signal.comment_count,
                signal.priority.value,
                json.dumps(list(signal.keywords)) if signal.keywords else None,
                signal.source_subgroup,
                signal.status.value,
                signal.created_at.isoformat(),
                now.isoformat(),
            ))
            return cursor.lastrowid

    def get_signal(self, signal_id: int) -> Optional[Signal]:
        """Get a signal by ID."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM signals WHERE id = ?", (signal_id,))
            row = cursor.fetchone()
            return self._row_to_signal(row) if row else None

    def list_signals(
        self,
        limit: int = 100,
        priority: Optional[Priority] = None,
        platform: Optional[Platform] = None,
        status: Optional[SignalStatus] = None,
    ) -> List[Signal]:
        """Signals newest first (post timestamp, then id)."""
        query = "SELECT * FROM signals WHERE 1=1"
        params: List[Any] = []

        if priority:
            query += " AND priority = ?"
            params.append(priority.value)

        if platform:
            query += " AND platform = ?"
            params.append(platform.value)

        if status:
            query += " AND status = ?"
            params.append(status.value)

        query += " ORDER BY created_at DESC, id DESC LIMIT ?"
        params.append(limit)

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [self._row_to_signal(row) for row in cursor.fetchall()]

    def update_status(self, signal_id: int, status: SignalStatus) -> bool:
        """Set the outreach status. Content fields are never updated."""
        with self._write_lock, self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE signals SET status = ? WHERE id = ?",
                (status.value, signal_id)
            )
            return cursor.rowcount > 0

    # === DEDUPLICATION ===

    def find_duplicate(self, signal: Signal) -> Optional[Signal]:
        """Find a stored signal with the same (platform, external_id)."""
        if signal.dedup_key is None:
            return None

        platform, external_id = signal.dedup_key
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT * FROM signals WHERE platform = ? AND external_id = ? LIMIT 1",
                (platform, external_id)
            )
            row = cursor.fetchone()
            return self._row_to_signal(row) if row else None

    # === RESPONSES ===

    def insert_response(self, signal_id: int, text: str) -> int:
        """Store generated outreach text for a signal. Returns the response id."""
        with self._write_lock, self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO responses (signal_id, response_text, created_at)
                VALUES (?, ?, ?)
            """, (signal_id, text, datetime.now().isoformat()))
            return cursor.lastrowid

    def list_responses(self, signal_id: Optional[int] = None, limit: int = 100) -> List[OutreachResponse]:
        """Responses newest first, with the title and platform of their signal."""
        query = """
            SELECT r.*, s.title AS signal_title, s.platform AS signal_platform
            FROM responses r
            LEFT JOIN signals s ON r.signal_id = s.id
        """
        params: List[Any] = []
        if signal_id is not None:
            query += " WHERE r.signal_id = ?"
            params.append(signal_id)
        query += " ORDER BY r.created_at DESC, r.id DESC LIMIT ?"
        params.append(limit)

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [
                OutreachResponse(
                    id=row["id"],
                    signal_id=row["signal_id"],
                    response_text=row["response_text"],
                    created_at=datetime.fromisoformat(row["created_at"]) if row["created_at"] else datetime.now(),
                    signal_title=row["signal_title"],
                    signal_platform=row["signal_platform"],
                )
                for row in cursor.fetchall()
            ]

    # === STATS ===

    def get_stats(self) -> Dict[str, Any]:
        """Get database statistics."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("SELECT COUNT(*) FROM signals")
            total = cursor.fetchone()[0]

            cursor.execute("SELECT platform, COUNT(*) FROM signals GROUP BY platform")
            platform_counts = {row[0]: row[1] for row in cursor.fetchall()}

            cursor.execute("SELECT priority, COUNT(*) FROM signals GROUP BY priority")
            priority_counts = {row[0]: row[1] for row in cursor.fetchall()}

            cursor.execute("SELECT status, COUNT(*) FROM signals GROUP BY status")
            status_counts = {row[0]: row[1] for row in cursor.fetchall()}

            cursor.execute("SELECT COUNT(*) FROM responses")
            responses = cursor.fetchone()[0]

            return {
                "total_signals": total,
                "by_platform": platform_counts,
                "by_priority": priority_counts,
                "by_status": status_counts,
                "total_responses": responses,
            }
